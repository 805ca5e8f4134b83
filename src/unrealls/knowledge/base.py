"""Version-aware lookups over the built-in profile table."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from unrealls.engine.models import EngineVersion
from unrealls.knowledge import tables
from unrealls.knowledge.profiles import VersionProfile, build_profile_chain

# Canonical keys, oldest first. Position in this tuple is the key's ordinal.
VERSION_KEYS = ("4.27", "5.0", "5.1", "5.2", "5.3", "5.4", "5.5")

DEFAULT_VERSION_KEY = "5.3"
UMBRELLA_UE4_KEY = "4.27"

# (minimum minor, key) for the 5.x line, newest first
_UE5_THRESHOLDS = ((5, "5.5"), (4, "5.4"), (3, "5.3"), (2, "5.2"), (1, "5.1"), (0, "5.0"))


def version_key(version: EngineVersion) -> str:
    """Map any version to the canonical key of the release line it belongs to.

    Older majors share the 4.27 profile; 5.x picks the newest known minor not
    above its own. Unknown majors use the default key.
    """
    if 0 < version.major < 5:
        return UMBRELLA_UE4_KEY
    if version.major == 5:
        for minimum, key in _UE5_THRESHOLDS:
            if version.minor >= minimum:
                return key
    return DEFAULT_VERSION_KEY


def key_ordinal(key: str) -> int:
    return VERSION_KEYS.index(key)


def build_profiles() -> Mapping[str, VersionProfile]:
    """Build every canonical profile from the two bases and the 5.x delta chain."""
    profiles = {tables.UE4_BASE.key: tables.UE4_BASE}
    for profile in build_profile_chain(tables.UE5_BASE, tables.UE5_DELTAS):
        profiles[profile.key] = profile
    return MappingProxyType(profiles)


class KnowledgeBase:
    """Read-only API knowledge per engine release line."""

    def __init__(self, profiles: Mapping[str, VersionProfile] | None = None) -> None:
        self._profiles = profiles if profiles is not None else build_profiles()

    @property
    def profiles(self) -> Mapping[str, VersionProfile]:
        return self._profiles

    def profile_for(self, version: EngineVersion) -> VersionProfile | None:
        return self._profiles.get(version_key(version))

    def get_class_methods(self, class_name: str, version: EngineVersion) -> tuple[str, ...]:
        profile = self.profile_for(version)
        if profile is not None and class_name in profile.classes:
            return profile.classes[class_name]
        return tables.DEFAULT_CLASS_METHODS.get(class_name, ())

    def get_macro_template(self, macro_name: str, version: EngineVersion) -> str:
        profile = self.profile_for(version)
        if profile is not None and macro_name in profile.macros:
            return profile.macros[macro_name]
        return _default_macro_template(macro_name, version)

    def get_include_paths(self, version: EngineVersion) -> tuple[str, ...]:
        profile = self.profile_for(version)
        if profile is not None:
            return profile.include_roots
        return _default_include_paths(version)


def _default_macro_template(macro_name: str, version: EngineVersion) -> str:
    by_major = tables.DEFAULT_UE4_MACROS if version.is_ue4 else tables.DEFAULT_UE5_MACROS
    if macro_name in by_major:
        return by_major[macro_name]
    return tables.DEFAULT_SHARED_MACROS.get(macro_name, "")


def _default_include_paths(version: EngineVersion) -> tuple[str, ...]:
    paths = list(tables.CORE_INCLUDE_ROOTS)
    if version.is_ue5:
        paths.append(tables.ENGINE_CLASSES_ROOT)
        if version.minor >= 2:
            paths.append(tables.UMG_ROOT)
    return tuple(paths)
