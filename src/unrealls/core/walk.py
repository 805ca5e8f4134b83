"""Directory walking that reports an outcome for every entry.

Filesystem errors never escape the walk. Each entry yields a ``WalkOutcome``
tagged FOUND, SKIPPED or ERRORED so callers (and tests) can tell why an
entry did not contribute.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class WalkStatus(Enum):
    FOUND = "found"
    SKIPPED = "skipped"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class WalkOutcome:
    """What happened to a single directory entry."""

    path: Path
    status: WalkStatus
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is WalkStatus.FOUND


def walk_subdirectories(root: Path) -> Iterator[WalkOutcome]:
    """Yield the immediate subdirectories of *root* as FOUND outcomes."""
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as e:
        yield WalkOutcome(root, WalkStatus.ERRORED, str(e))
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            yield WalkOutcome(path, WalkStatus.ERRORED, str(e))
            continue
        if is_dir:
            yield WalkOutcome(path, WalkStatus.FOUND)
        else:
            yield WalkOutcome(path, WalkStatus.SKIPPED, "not a directory")


def walk_files(root: Path, suffixes: Sequence[str]) -> Iterator[WalkOutcome]:
    """Recursively yield files under *root* whose suffix is in *suffixes*.

    Symlinked directories are not followed. An unreadable directory yields
    one ERRORED outcome and the walk continues with its siblings.
    """
    pending = [root]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            yield WalkOutcome(current, WalkStatus.ERRORED, str(e))
            continue

        subdirs: list[Path] = []
        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(path)
                    continue
                is_file = entry.is_file()
            except OSError as e:
                yield WalkOutcome(path, WalkStatus.ERRORED, str(e))
                continue

            if not is_file:
                yield WalkOutcome(path, WalkStatus.SKIPPED, "not a regular file")
            elif path.suffix not in suffixes:
                yield WalkOutcome(path, WalkStatus.SKIPPED, "extension")
            else:
                yield WalkOutcome(path, WalkStatus.FOUND)

        # Depth-first, in name order
        pending.extend(reversed(subdirs))
