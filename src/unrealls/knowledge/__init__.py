"""Versioned engine API knowledge."""

from unrealls.knowledge.base import (
    DEFAULT_VERSION_KEY,
    VERSION_KEYS,
    KnowledgeBase,
    build_profiles,
    key_ordinal,
    version_key,
)
from unrealls.knowledge.profiles import ProfileDelta, VersionProfile, build_profile_chain

__all__ = [
    "DEFAULT_VERSION_KEY",
    "VERSION_KEYS",
    "KnowledgeBase",
    "ProfileDelta",
    "VersionProfile",
    "build_profile_chain",
    "build_profiles",
    "key_ordinal",
    "version_key",
]
