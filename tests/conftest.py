"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import json
import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of unrealls modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("unrealls"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Remove UNREALLS__* env vars for clean tests."""
    orig = {k: v for k, v in os.environ.items() if k.startswith("UNREALLS__")}
    for k in orig:
        del os.environ[k]
    yield
    for k in [k for k in os.environ if k.startswith("UNREALLS__")]:
        del os.environ[k]
    os.environ.update(orig)


@pytest.fixture
def make_install(tmp_path: Path) -> Callable[..., Path]:
    """Create a fake engine install; writes Build.version when a version is given."""

    def _make(
        name: str,
        version: tuple[int, int, int] | None = None,
        *,
        parent: Path | None = None,
        binaries: bool = False,
    ) -> Path:
        root = (parent or tmp_path) / name
        engine = root / "Engine"
        engine.mkdir(parents=True)
        if version is not None:
            build = engine / "Build"
            build.mkdir()
            major, minor, patch = version
            (build / "Build.version").write_text(
                json.dumps({"MajorVersion": major, "MinorVersion": minor, "PatchVersion": patch})
            )
        if binaries:
            (engine / "Binaries").mkdir()
        return root

    return _make


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create a project directory with a .uproject manifest."""

    def _make(name: str, association: str | None = "5.3", *, parent: Path | None = None) -> Path:
        project = (parent or tmp_path) / name
        project.mkdir(parents=True)
        manifest: dict[str, object] = {"FileVersion": 3}
        if association is not None:
            manifest["EngineAssociation"] = association
        (project / f"{name}.uproject").write_text(json.dumps(manifest))
        return project

    return _make
