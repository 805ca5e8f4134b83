"""Tests for header/source pairing."""

from pathlib import Path

import pytest

from unrealls.actions.pairing import (
    NOT_PAIRABLE,
    Member,
    extract_declarations,
    extract_definitions,
    header_class_name,
    paired_path,
    sync_header_source,
)

HEADER = """#pragma once

#include "CoreMinimal.h"
#include "MyActor.generated.h"

UCLASS()
class GAME_API AMyActor : public AActor
{
\tGENERATED_BODY()

public:
\tAMyActor();
\tvirtual void Tick(float DeltaTime) override;
\tfloat GetHealth() const;
\tvoid SetHealth(float NewHealth = 100.f);
};
"""

SOURCE = """#include "MyActor.h"

AMyActor::AMyActor()
{
}

void AMyActor::Tick(float DeltaTime)
{
\tSuper::Tick(DeltaTime);
}
"""


class TestPaths:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (Path("Source/MyActor.h"), Path("Source/MyActor.cpp")),
            (Path("Source/MyActor.hpp"), Path("Source/MyActor.cpp")),
            (Path("Source/MyActor.cpp"), Path("Source/MyActor.h")),
            (Path("Source/MyActor.cc"), Path("Source/MyActor.h")),
            (Path("Game.Build.cs"), None),
        ],
    )
    def test_paired_path(self, path: Path, expected: Path | None) -> None:
        assert paired_path(path) == expected


class TestExtraction:
    def test_given_header_when_parsed_then_class_name(self) -> None:
        assert header_class_name(HEADER) == "AMyActor"

    def test_given_header_when_extracted_then_constructor_first_then_methods(self) -> None:
        members = extract_declarations(HEADER)

        assert [m.name for m in members] == ["AMyActor", "Tick", "GetHealth", "SetHealth"]
        assert members[0].is_constructor
        assert members[2].is_const
        assert members[3].parameters == ("float NewHealth = 100.f",)

    def test_given_no_class_when_extracted_then_empty(self) -> None:
        assert extract_declarations("void FreeFunction();\n") == []

    def test_given_source_when_extracted_then_out_of_line_definitions_only(self) -> None:
        members = extract_definitions(SOURCE)

        assert [(m.class_name, m.name, m.return_type) for m in members] == [
            ("AMyActor", "AMyActor", ""),
            ("AMyActor", "Tick", "void"),
        ]


class TestMember:
    def test_definition_stub_drops_default_values(self) -> None:
        member = Member("AMyActor", "SetHealth", "void", ("float NewHealth = 100.f",))

        assert member.definition_stub() == "void AMyActor::SetHealth(float NewHealth)\n{\n}\n"

    def test_const_member_declaration(self) -> None:
        member = Member("AMyActor", "GetHealth", "float", is_const=True)

        assert member.declaration() == "\tfloat GetHealth() const;"


class TestSyncHeaderSource:
    def test_given_header_with_partial_source_when_synced_then_missing_stubs(
        self, tmp_path: Path
    ) -> None:
        # Given
        header = tmp_path / "MyActor.h"
        header.write_text(HEADER)
        (tmp_path / "MyActor.cpp").write_text(SOURCE)

        # When
        result = sync_header_source(header)

        # Then
        assert result == (
            "// Missing implementations for AMyActor in MyActor.cpp\n"
            "\n"
            "float AMyActor::GetHealth() const\n{\n}\n"
            "\n"
            "void AMyActor::SetHealth(float NewHealth)\n{\n}\n"
        )

    def test_given_header_without_source_when_synced_then_every_member_stubbed(
        self, tmp_path: Path
    ) -> None:
        header = tmp_path / "MyActor.h"
        header.write_text(HEADER)

        result = sync_header_source(header)

        assert "AMyActor::AMyActor()\n{\n}\n" in result
        assert "void AMyActor::Tick(float DeltaTime)" in result

    def test_given_fully_implemented_header_when_synced_then_nothing_missing(
        self, tmp_path: Path
    ) -> None:
        header = tmp_path / "Small.h"
        header.write_text("class GAME_API ASmall : public AActor\n{\n\tvoid Go();\n};\n")
        (tmp_path / "Small.cpp").write_text("void ASmall::Go()\n{\n}\n")

        assert sync_header_source(header) == "// ASmall: all declared functions are implemented"

    def test_given_source_when_synced_then_declarations(self, tmp_path: Path) -> None:
        source = tmp_path / "MyActor.cpp"
        source.write_text(SOURCE)

        result = sync_header_source(source)

        assert result.splitlines() == [
            "// Declarations for AMyActor from MyActor.cpp",
            "\tAMyActor();",
            "\tvoid Tick(float DeltaTime);",
        ]

    def test_given_source_without_definitions_when_synced_then_message(
        self, tmp_path: Path
    ) -> None:
        source = tmp_path / "Empty.cpp"
        source.write_text('#include "Empty.h"\n')

        assert sync_header_source(source) == "// No definitions found in Empty.cpp"

    def test_given_missing_header_when_synced_then_unreadable(self, tmp_path: Path) -> None:
        assert sync_header_source(tmp_path / "Gone.h") == "// Unable to read Gone.h"

    def test_given_other_file_when_synced_then_not_pairable(self, tmp_path: Path) -> None:
        assert sync_header_source(tmp_path / "Game.Build.cs") == NOT_PAIRABLE
