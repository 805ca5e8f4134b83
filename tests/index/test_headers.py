"""Tests for the background header index."""

import os
from pathlib import Path

import pytest

from unrealls.core.walk import WalkStatus
from unrealls.index.headers import HeaderIndex

CORE = "Engine/Source/Runtime/Core/Public"
CLASSES = "Engine/Source/Runtime/Engine/Classes"


def write_header(install: Path, root: str, name: str, content: str) -> Path:
    path = install / root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def install(tmp_path: Path) -> Path:
    root = tmp_path / "UE_5.3"
    write_header(
        root,
        CORE,
        "GameFramework/Actor.h",
        "class ENGINE_API AActor : public UObject\n{\n    void K2_DestroyActor();\n"
        "    FVector GetActorLocation() const;\n};\n",
    )
    write_header(
        root,
        CLASSES,
        "Pawn.h",
        "class ENGINE_API APawn : public AActor\n{\n    virtual void PossessedBy(AController* C) override;\n};\n",
    )
    write_header(root, CLASSES, "Pawn.cpp", "void APawn::PossessedBy(AController* C) {}\n")
    return root


class TestScan:
    def test_given_install_when_scanned_then_classes_indexed(self, install: Path) -> None:
        # Given
        index = HeaderIndex(str(install), [CORE, CLASSES], autostart=False)

        # When
        report = index.scan()

        # Then
        assert index.get_class_methods("AActor") == ("K2_DestroyActor", "GetActorLocation")
        assert index.get_class_methods("APawn") == ("PossessedBy",)
        assert index.class_names() == ["AActor", "APawn"]
        assert report.roots_scanned == 2
        assert report.files_scanned == 2
        assert report.classes_found == 2
        assert report.skipped == 1
        assert index.is_complete

    def test_given_missing_root_when_scanned_then_recorded_and_others_scanned(
        self, install: Path
    ) -> None:
        index = HeaderIndex(str(install), ["Engine/Source/Runtime/UMG/Public", CORE], autostart=False)

        report = index.scan()

        assert report.roots_missing == ["Engine/Source/Runtime/UMG/Public"]
        assert index.get_class_methods("AActor")

    def test_given_empty_install_path_when_scanned_then_nothing_and_complete(self) -> None:
        index = HeaderIndex("", [CORE], autostart=False)

        report = index.scan()

        assert report.files_scanned == 0
        assert index.class_names() == []
        assert index.is_complete

    def test_given_custom_suffixes_when_scanned_then_used(self, install: Path) -> None:
        write_header(install, CORE, "Extra.hpp", "class CORE_API UExtra : public UObject\n{\n    void Run();\n};\n")
        index = HeaderIndex(str(install), [CORE], suffixes=(".h", ".hpp"), autostart=False)

        index.scan()

        assert index.get_class_methods("UExtra") == ("Run",)

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_given_unreadable_dir_when_scanned_then_error_recorded_and_scan_continues(
        self, install: Path
    ) -> None:
        # Given
        locked = install / CORE / "Locked"
        locked.mkdir()
        locked.chmod(0)
        index = HeaderIndex(str(install), [CORE], autostart=False)

        # When
        try:
            report = index.scan()
        finally:
            locked.chmod(0o755)

        # Then
        assert [e.status for e in report.errors] == [WalkStatus.ERRORED]
        assert index.get_class_methods("AActor")

    def test_given_unknown_class_when_looked_up_then_empty(self, install: Path) -> None:
        index = HeaderIndex(str(install), [CORE], autostart=False)

        assert index.get_class_methods("ANothing") == ()


class TestBackgroundScan:
    def test_given_autostart_when_waited_then_complete_with_results(self, install: Path) -> None:
        # Given
        index = HeaderIndex(str(install), [CORE, CLASSES])

        # When
        finished = index.wait(timeout=10)

        # Then
        assert finished
        assert index.get_class_methods("APawn") == ("PossessedBy",)
        assert index.last_report is not None

    def test_given_started_twice_when_started_then_single_scan(self, install: Path) -> None:
        index = HeaderIndex(str(install), [CORE], autostart=False)

        index.start()
        index.start()

        assert index.wait(timeout=10)

    def test_given_scan_raises_when_background_then_complete_still_signalled(
        self, install: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Given
        index = HeaderIndex(str(install), [CORE], autostart=False)

        def explode() -> None:
            raise RuntimeError("disk vanished")

        monkeypatch.setattr(index, "scan", explode)

        # When
        index.start()

        # Then
        assert index.wait(timeout=10)
        assert index.get_class_methods("AActor") == ()


class TestRootErrors:
    def test_given_root_stat_fails_when_scanned_then_error_recorded_and_later_roots_scanned(
        self, install: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Given - the first include root cannot be stat'ed
        blocked = install / CORE
        real_is_dir = Path.is_dir

        def is_dir(self: Path) -> bool:
            if self == blocked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_dir(self)

        monkeypatch.setattr(Path, "is_dir", is_dir)
        index = HeaderIndex(
            str(install), [CORE, CLASSES, "Engine/Source/Runtime/UMG/Public"], autostart=False
        )

        # When
        report = index.scan()

        # Then
        assert [(e.path, e.status) for e in report.errors] == [(blocked, WalkStatus.ERRORED)]
        assert "Permission denied" in report.errors[0].reason
        assert report.roots_scanned == 1
        assert report.roots_missing == ["Engine/Source/Runtime/UMG/Public"]
        assert index.get_class_methods("APawn") == ("PossessedBy",)
        assert index.get_class_methods("AActor") == ()
        assert index.is_complete
