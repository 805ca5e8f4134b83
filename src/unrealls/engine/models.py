"""Engine version model."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

_ASSOCIATION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


@total_ordering
@dataclass(frozen=True, slots=True)
class EngineVersion:
    """One engine release, optionally tied to an install directory.

    Ordering and equality use (major, minor, patch) only. A major of 0
    marks an invalid or unresolved version.
    """

    major: int
    minor: int
    patch: int = 0
    install_path: str = field(default="", compare=False)

    @property
    def full_version(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def is_valid(self) -> bool:
        return self.major > 0

    @property
    def is_ue4(self) -> bool:
        return self.major == 4

    @property
    def is_ue5(self) -> bool:
        return self.major >= 5

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def with_install_path(self, install_path: str) -> EngineVersion:
        return EngineVersion(self.major, self.minor, self.patch, install_path)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EngineVersion):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __str__(self) -> str:
        return self.full_version

    @classmethod
    def parse(cls, text: str, install_path: str = "") -> EngineVersion | None:
        """Extract the first ``major.minor[.patch]`` found in *text*.

        >>> EngineVersion.parse("5.2.1-custom")
        EngineVersion(major=5, minor=2, patch=1, install_path='')
        """
        match = _ASSOCIATION_RE.search(text)
        if match is None:
            return None
        return cls(
            major=int(match.group(1)),
            minor=int(match.group(2)),
            patch=int(match.group(3) or 0),
            install_path=install_path,
        )

