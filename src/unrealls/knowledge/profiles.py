"""Immutable per-release-line profiles and the delta chain that builds them."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType


def _freeze_classes(classes: Mapping[str, Sequence[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({name: tuple(methods) for name, methods in classes.items()})


@dataclass(frozen=True, slots=True)
class VersionProfile:
    """Known API surface for one canonical release line."""

    key: str
    classes: Mapping[str, tuple[str, ...]]
    macros: Mapping[str, str]
    include_roots: tuple[str, ...]

    @classmethod
    def create(
        cls,
        key: str,
        *,
        classes: Mapping[str, Sequence[str]],
        macros: Mapping[str, str],
        include_roots: Sequence[str],
    ) -> VersionProfile:
        return cls(
            key=key,
            classes=_freeze_classes(classes),
            macros=MappingProxyType(dict(macros)),
            include_roots=tuple(include_roots),
        )

    def apply(self, delta: ProfileDelta) -> VersionProfile:
        """Return the profile for ``delta.key``: this one plus the delta's additions.

        Additions are appended; nothing is removed or reordered, and this
        profile is left untouched.
        """
        classes = {name: list(methods) for name, methods in self.classes.items()}
        for class_name, methods in delta.methods.items():
            classes.setdefault(class_name, []).extend(methods)
        return VersionProfile.create(
            delta.key,
            classes=classes,
            macros=self.macros,
            include_roots=[*self.include_roots, *delta.include_roots],
        )


@dataclass(frozen=True, slots=True)
class ProfileDelta:
    """Append-only changes introduced by one release line."""

    key: str
    methods: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    include_roots: tuple[str, ...] = ()


def build_profile_chain(
    base: VersionProfile, deltas: Sequence[ProfileDelta]
) -> list[VersionProfile]:
    """Apply *deltas* in order, each on top of the previous result."""
    chain = [base]
    for delta in deltas:
        chain.append(chain[-1].apply(delta))
    return chain
