"""Tests for the engine action provider."""

from pathlib import Path

import pytest

from unrealls.actions.pairing import NOT_PAIRABLE
from unrealls.actions.provider import NO_FUNCTION_FOUND, EngineActions, uri_to_path
from unrealls.engine.models import EngineVersion


@pytest.fixture
def actions(tmp_path: Path) -> EngineActions:
    return EngineActions(tmp_path, EngineVersion(5, 3, 0))


def _document(path: Path, line: int | None = None) -> dict:
    params: dict = {"textDocument": {"uri": path.as_uri()}}
    if line is not None:
        params["position"] = {"line": line, "character": 0}
    return params


class TestUriToPath:
    @pytest.mark.parametrize(
        ("uri", "expected"),
        [
            ("file:///home/dev/Game/Source/A.h", Path("/home/dev/Game/Source/A.h")),
            ("file:///home/dev/My%20Game/A.h", Path("/home/dev/My Game/A.h")),
            ("file:///C:/Projects/Game/A.h", Path("C:/Projects/Game/A.h")),
            ("/plain/path/A.h", Path("/plain/path/A.h")),
        ],
    )
    def test_uri_to_path(self, uri: str, expected: Path) -> None:
        assert uri_to_path(uri) == expected


class TestRunAction:
    def test_action_names(self, actions: EngineActions) -> None:
        assert actions.action_names == [
            "generateUClass",
            "generateBlueprintFunction",
            "syncHeaderSource",
            "analyzeLogs",
            "interpretErrors",
        ]

    def test_given_unknown_action_when_run_then_comment(self, actions: EngineActions) -> None:
        assert actions.run_action("refactorEverything", {}) == "// Unknown action: refactorEverything"

    def test_given_class_params_when_generated_then_header_for_class(
        self, actions: EngineActions
    ) -> None:
        result = actions.run_action(
            "generateUClass",
            {"className": "AEnemy", "baseClass": "ACharacter", "components": ["USphereComponent"]},
        )

        assert "class GAME_API AEnemy : public ACharacter" in result
        assert '#include "GameFramework/Character.h"' in result
        assert "\tclass USphereComponent* SphereComponent;" in result

    def test_given_no_params_when_generated_then_default_actor(self, actions: EngineActions) -> None:
        result = actions.run_action("generateUClass", {})

        assert "class GAME_API MyActor : public AActor" in result

    def test_given_document_position_when_wrapping_then_blueprint_function(
        self, actions: EngineActions, tmp_path: Path
    ) -> None:
        # Given
        header = tmp_path / "Weapon.h"
        header.write_text("#pragma once\n\nvoid Fire(float Spread);\n")

        # When
        result = actions.run_action("generateBlueprintFunction", _document(header, line=2))

        # Then
        assert "void Blueprint_Fire(float Spread)" in result
        assert "\treturn Fire(Spread);" in result

    @pytest.mark.parametrize("line", [0, 40, None])
    def test_given_no_function_at_position_when_wrapping_then_comment(
        self, actions: EngineActions, tmp_path: Path, line: int | None
    ) -> None:
        header = tmp_path / "Weapon.h"
        header.write_text("#pragma once\n\nvoid Fire(float Spread);\n")

        result = actions.run_action("generateBlueprintFunction", _document(header, line=line))

        assert result == NO_FUNCTION_FOUND

    def test_given_unreadable_document_when_wrapping_then_comment(
        self, actions: EngineActions, tmp_path: Path
    ) -> None:
        result = actions.run_action(
            "generateBlueprintFunction", _document(tmp_path / "Missing.h", line=0)
        )

        assert result == NO_FUNCTION_FOUND

    def test_given_source_document_when_synced_then_declarations(
        self, actions: EngineActions, tmp_path: Path
    ) -> None:
        source = tmp_path / "Door.cpp"
        source.write_text("void ADoor::Open()\n{\n}\n")

        result = actions.run_action("syncHeaderSource", _document(source))

        assert result.splitlines()[:2] == ["// Declarations for ADoor from Door.cpp", "\tvoid Open();"]

    def test_given_no_document_when_synced_then_not_pairable(self, actions: EngineActions) -> None:
        assert actions.run_action("syncHeaderSource", {}) == NOT_PAIRABLE

    def test_given_project_logs_when_analyzed_then_report(
        self, actions: EngineActions, tmp_path: Path
    ) -> None:
        logs = tmp_path / "Saved" / "Logs"
        logs.mkdir(parents=True)
        (logs / "Game.log").write_text("LogMemory: Out of memory\n")

        report = actions.run_action("analyzeLogs", {})

        assert " * Total Issues Found: 1" in report
        assert "// HIGH SEVERITY ISSUES (1)" in report

    def test_given_build_log_when_interpreted_then_report(
        self, actions: EngineActions, tmp_path: Path
    ) -> None:
        logs = tmp_path / "Saved" / "Logs"
        logs.mkdir(parents=True)
        (logs / "UnrealBuildTool.log").write_text("error: GENERATED_BODY() not found\n")

        report = actions.run_action("interpretErrors", {})

        assert " * Found 1 compile errors" in report
        assert "// ERROR #1 [UnrealMacro]" in report
