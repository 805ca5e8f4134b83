"""Merges knowledge-base and header-index results into completion candidates."""

from __future__ import annotations

from typing import Protocol

from unrealls.completion.models import (
    MACRO_TIER,
    MEMBER_TIER,
    CompletionCandidate,
    CompletionKind,
)
from unrealls.engine.models import EngineVersion
from unrealls.knowledge.base import KnowledgeBase

MACRO_NAMES = ("UCLASS", "USTRUCT", "UFUNCTION", "UPROPERTY", "UENUM")
MEMBER_ACCESS = "::"


class ScannedMethods(Protocol):
    def get_class_methods(self, class_name: str) -> tuple[str, ...]: ...


def owner_class(context: str) -> str | None:
    """Identifier immediately before the last ``::`` in *context*.

    >>> owner_class("    Super::")
    'Super'
    """
    pos = context.rfind(MEMBER_ACCESS)
    if pos == -1:
        return None
    before = context[:pos]
    parts = before.split()
    if not parts or before[-1:].isspace():
        return ""
    return parts[-1]


class CompletionResolver:
    """Prefix-matched macro and member completions for one engine version."""

    def __init__(
        self,
        version: EngineVersion,
        knowledge: KnowledgeBase,
        scanned: ScannedMethods | None = None,
    ) -> None:
        self._version = version
        self._knowledge = knowledge
        self._scanned = scanned

    @property
    def version(self) -> EngineVersion:
        return self._version

    @property
    def scanned(self) -> ScannedMethods | None:
        return self._scanned

    def get_completions(self, prefix: str, context: str) -> list[CompletionCandidate]:
        """Macro candidates, then member candidates when *context* has ``::``.

        Ordered by sort text, so macros always come first.
        """
        candidates = self.macro_completions(prefix)
        if MEMBER_ACCESS in context:
            candidates.extend(self.member_completions(context, prefix))
        return sorted(candidates, key=lambda c: c.sort_text)

    def macro_completions(self, prefix: str) -> list[CompletionCandidate]:
        detail = f"Unreal Engine {self._version} Macro"
        return [
            CompletionCandidate(
                label=macro,
                insert_text=self._knowledge.get_macro_template(macro, self._version),
                detail=detail,
                kind=CompletionKind.SNIPPET,
                sort_text=MACRO_TIER + macro,
            )
            for macro in MACRO_NAMES
            if macro.startswith(prefix)
        ]

    def member_completions(self, context: str, prefix: str) -> list[CompletionCandidate]:
        class_name = owner_class(context)
        if not class_name:
            return []

        methods = set(self._knowledge.get_class_methods(class_name, self._version))
        if self._scanned is not None:
            methods.update(self._scanned.get_class_methods(class_name))

        return [
            CompletionCandidate(
                label=method,
                insert_text=method,
                detail=f"{class_name}::{method} (UE {self._version})",
                kind=CompletionKind.METHOD,
                sort_text=MEMBER_TIER + method,
            )
            for method in methods
            if method.startswith(prefix)
        ]
