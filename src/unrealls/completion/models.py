"""Completion candidate model."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class CompletionKind(IntEnum):
    """Subset of the protocol's CompletionItemKind values."""

    METHOD = 2
    SNIPPET = 15


MACRO_TIER = "0_"
MEMBER_TIER = "1_"


@dataclass(frozen=True, slots=True)
class CompletionCandidate:
    """A single suggestion returned to the editor."""

    label: str
    insert_text: str
    detail: str
    kind: CompletionKind
    sort_text: str

    def to_item(self) -> dict[str, Any]:
        """Wire shape of a completion item."""
        return {
            "label": self.label,
            "insertText": self.insert_text,
            "detail": self.detail,
            "kind": int(self.kind),
            "sortText": self.sort_text,
        }
