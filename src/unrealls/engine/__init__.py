"""Engine install discovery and version resolution."""

from unrealls.engine.locator import (
    EngineLocator,
    default_search_roots,
    detect_install,
    find_projects,
)
from unrealls.engine.models import EngineVersion

__all__ = [
    "EngineLocator",
    "EngineVersion",
    "default_search_roots",
    "detect_install",
    "find_projects",
]
