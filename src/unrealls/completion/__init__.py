"""Completion candidates for macros and class members."""

from unrealls.completion.models import CompletionCandidate, CompletionKind
from unrealls.completion.resolver import MACRO_NAMES, CompletionResolver, owner_class

__all__ = [
    "MACRO_NAMES",
    "CompletionCandidate",
    "CompletionKind",
    "CompletionResolver",
    "owner_class",
]
