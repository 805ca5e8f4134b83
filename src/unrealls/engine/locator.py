"""Engine install discovery and per-project version resolution.

Discovery probes a fixed set of candidate roots. A root that contains an
``Engine`` directory is an install; otherwise each immediate subdirectory is
tested. Nothing here raises on filesystem or parse problems: a root that
cannot be read simply contributes no installs.
"""

from __future__ import annotations

import json
import os
import re
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import structlog

from unrealls.config.models import EngineConfig
from unrealls.core.walk import WalkStatus, walk_subdirectories
from unrealls.engine.models import EngineVersion

logger = structlog.get_logger()

BUILD_VERSION_PATH = Path("Engine") / "Build" / "Build.version"
PROJECT_SUFFIX = ".uproject"

_PATH_VERSION_RE = re.compile(
    r"(?:UE[_-]?|UnrealEngine[_-]?)(\d+)\.(\d+)(?:\.(\d+))?", re.IGNORECASE
)

# Versions probed as /Applications/UE_5.x and ~/UnrealEngine/UE_5.x
_ENUMERATED_MINORS = range(0, 6)

_PLATFORM_ROOTS: dict[str, tuple[str, ...]] = {
    "darwin": (
        "/Users/Shared/Epic Games",
        "/Applications/Epic Games",
        "/Applications/UnrealEngine",
        *(f"/Applications/UE_5.{minor}" for minor in _ENUMERATED_MINORS),
    ),
    "win32": (
        "C:/Program Files/Epic Games",
        "D:/Program Files/Epic Games",
    ),
    "linux": (
        "/opt/UnrealEngine",
        "/opt/Epic Games",
    ),
}

_HOME_ROOTS = (
    "Library/Epic Games",
    "Epic Games",
    "UnrealEngine",
    "Applications/Epic Games",
    "Documents/Epic Games",
    "Documents/UnrealEngine",
)

# Directories never descended into while looking for projects
_PROJECT_SEARCH_SKIP = frozenset({"Binaries", "Intermediate", "DerivedDataCache", "node_modules"})


def default_search_roots(
    platform: str | None = None,
    home: str | None = None,
) -> list[Path]:
    """Platform-conventional install roots followed by user-derived ones."""
    platform = platform or sys.platform
    roots = [Path(p) for p in _PLATFORM_ROOTS.get(platform, ())]
    if home:
        base = Path(home)
        roots.extend(base / rel for rel in _HOME_ROOTS)
        roots.extend(base / "UnrealEngine" / f"UE_5.{minor}" for minor in _ENUMERATED_MINORS)
    return roots


def read_build_version(install: Path) -> EngineVersion | None:
    """Read ``Engine/Build/Build.version`` from an install, if present and valid JSON."""
    manifest = install / BUILD_VERSION_PATH
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug("build_version_unreadable", path=str(manifest), error=str(e))
        return None
    if not isinstance(data, dict):
        return None
    try:
        return EngineVersion(
            major=int(data.get("MajorVersion", 0)),
            minor=int(data.get("MinorVersion", 0)),
            patch=int(data.get("PatchVersion", 0)),
            install_path=str(install),
        )
    except (TypeError, ValueError):
        return None


def version_from_path(install: Path) -> EngineVersion | None:
    """Extract a version from a path such as ``/Applications/UE_5.3``."""
    match = _PATH_VERSION_RE.search(str(install))
    if match is None:
        return None
    return EngineVersion(
        major=int(match.group(1)),
        minor=int(match.group(2)),
        patch=int(match.group(3) or 0),
        install_path=str(install),
    )


def detect_install(path: Path) -> EngineVersion | None:
    """Return the engine version installed at *path*, or None.

    The manifest wins over the path name. A manifest that parses but names
    major version 0 rejects the directory outright.
    """
    try:
        if not (path / "Engine").is_dir():
            return None
    except OSError:
        return None

    version = read_build_version(path)
    if version is None:
        version = version_from_path(path)
    if version is None or not version.is_valid:
        return None
    return version


def dedupe_versions(versions: Sequence[EngineVersion]) -> list[EngineVersion]:
    """Sort descending and drop repeated (major, minor, patch).

    Among duplicates the entry found first is kept.
    """
    ordered = sorted(versions, reverse=True)  # stable: probe order kept among equals
    result: list[EngineVersion] = []
    for version in ordered:
        if result and result[-1] == version:
            continue
        result.append(version)
    return result


class EngineLocator:
    """Finds installed engines and resolves the engine a project uses."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        roots: Sequence[Path] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._environ = os.environ if environ is None else environ
        if roots is None:
            roots = default_search_roots(home=self._environ.get("HOME"))
        self._roots = [*roots, *(Path(p).expanduser() for p in self._config.search_roots)]

    @property
    def default_version(self) -> EngineVersion:
        parsed = EngineVersion.parse(self._config.default_version)
        return parsed if parsed is not None else EngineVersion(5, 3, 0)

    def candidate_roots(self) -> list[Path]:
        return list(self._roots)

    def discover_all(self) -> list[EngineVersion]:
        """All installs found, newest first, one per (major, minor, patch)."""
        found: list[EngineVersion] = []

        for root in self._roots:
            found.extend(self._probe_root(root))

        for name in self._config.env_vars:
            value = self._environ.get(name)
            if not value:
                continue
            version = detect_install(Path(value))
            if version is not None:
                logger.debug("engine_discovered", path=value, version=str(version), env=name)
                found.append(version)

        return dedupe_versions(found)

    def _probe_root(self, root: Path) -> list[EngineVersion]:
        try:
            if not root.is_dir():
                return []
        except OSError:
            return []

        version = detect_install(root)
        if version is not None:
            logger.debug("engine_discovered", path=str(root), version=str(version))
            return [version]

        versions: list[EngineVersion] = []
        for outcome in walk_subdirectories(root):
            if outcome.status is WalkStatus.ERRORED:
                logger.debug("engine_root_unreadable", path=str(outcome.path), error=outcome.reason)
                continue
            if not outcome.found:
                continue
            version = detect_install(outcome.path)
            if version is not None:
                logger.debug("engine_discovered", path=str(outcome.path), version=str(version))
                versions.append(version)
        return versions

    def read_engine_association(self, project_path: Path) -> str | None:
        """The ``EngineAssociation`` string of the first project manifest in *project_path*."""
        for manifest in project_manifests(project_path):
            try:
                data = json.loads(manifest.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("project_manifest_unreadable", path=str(manifest), error=str(e))
                continue
            association = data.get("EngineAssociation") if isinstance(data, dict) else None
            if isinstance(association, str):
                return association
        return None

    def resolve_for_project(self, project_path: Path) -> EngineVersion:
        """Resolve the engine version a project targets.

        Falls back to the newest discovered install, then to the configured
        default version with no install path.
        """
        discovered = self.discover_all()

        association = self.read_engine_association(project_path)
        if association is not None:
            wanted = EngineVersion.parse(association)
            if wanted is None:
                logger.info("engine_association_unversioned", association=association)
            else:
                for candidate in discovered:
                    if (candidate.major, candidate.minor) == (wanted.major, wanted.minor):
                        resolved = wanted.with_install_path(candidate.install_path)
                        logger.info(
                            "engine_resolved",
                            source="project",
                            version=str(resolved),
                            install_path=resolved.install_path,
                        )
                        return resolved
                logger.info("engine_association_not_installed", version=str(wanted))

        if discovered:
            logger.info("engine_resolved", source="newest_install", version=str(discovered[0]))
            return discovered[0]

        fallback = self.default_version
        logger.info("engine_resolved", source="default", version=str(fallback))
        return fallback


def project_manifests(project_path: Path) -> list[Path]:
    """Project manifest files directly inside *project_path*, sorted."""
    try:
        return sorted(p for p in project_path.iterdir() if p.suffix == PROJECT_SUFFIX and p.is_file())
    except OSError:
        return []


def find_projects(search_root: Path, max_depth: int = 3) -> list[Path]:
    """Directories under *search_root* (inclusive) holding a project manifest."""
    projects: list[Path] = []

    def _search(path: Path, depth: int) -> None:
        try:
            entries = sorted(path.iterdir())
        except OSError:
            return
        has_manifest = False
        for entry in entries:
            try:
                if entry.is_file() and entry.suffix == PROJECT_SUFFIX:
                    has_manifest = True
                elif (
                    entry.is_dir()
                    and depth < max_depth
                    and not entry.name.startswith(".")
                    and entry.name not in _PROJECT_SEARCH_SKIP
                ):
                    _search(entry, depth + 1)
            except OSError:
                continue
        if has_manifest:
            projects.append(path)

    _search(search_root, 0)
    return sorted(projects)
