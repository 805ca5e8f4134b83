"""Tests for the version knowledge base."""

import pytest

from unrealls.engine.models import EngineVersion
from unrealls.knowledge import tables
from unrealls.knowledge.base import (
    VERSION_KEYS,
    KnowledgeBase,
    key_ordinal,
    version_key,
)


@pytest.fixture(scope="module")
def knowledge() -> KnowledgeBase:
    return KnowledgeBase()


class TestVersionKey:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            (EngineVersion(4, 27, 2), "4.27"),
            (EngineVersion(4, 20), "4.27"),
            (EngineVersion(3, 5), "4.27"),
            (EngineVersion(5, 0), "5.0"),
            (EngineVersion(5, 2, 1), "5.2"),
            (EngineVersion(5, 5), "5.5"),
            (EngineVersion(5, 7), "5.5"),
            (EngineVersion(6, 0), "5.3"),
            (EngineVersion(0, 0), "5.3"),
        ],
    )
    def test_given_version_when_keyed_then_maps_to_release_line(
        self, version: EngineVersion, expected: str
    ) -> None:
        assert version_key(version) == expected

    @pytest.mark.parametrize("major", [4, 5])
    def test_given_increasing_minor_when_keyed_then_monotonic(self, major: int) -> None:
        ordinals = [key_ordinal(version_key(EngineVersion(major, minor))) for minor in range(0, 30)]

        assert ordinals == sorted(ordinals)

    def test_every_key_has_a_profile(self, knowledge: KnowledgeBase) -> None:
        assert set(knowledge.profiles) == set(VERSION_KEYS)


class TestDeltaChain:
    @pytest.mark.parametrize("key", ["5.1", "5.2", "5.3", "5.4", "5.5"])
    def test_given_method_added_at_5_1_when_later_profile_then_present(
        self, knowledge: KnowledgeBase, key: str
    ) -> None:
        assert "GetActorNameOrLabel" in knowledge.profiles[key].classes["AActor"]

    @pytest.mark.parametrize("key", ["4.27", "5.0"])
    def test_given_method_added_at_5_1_when_earlier_profile_then_absent(
        self, knowledge: KnowledgeBase, key: str
    ) -> None:
        assert "GetActorNameOrLabel" not in knowledge.profiles[key].classes["AActor"]

    def test_given_5_3_when_methods_listed_then_base_order_kept_and_additions_last(
        self, knowledge: KnowledgeBase
    ) -> None:
        methods = knowledge.get_class_methods("AActor", EngineVersion(5, 3))

        assert methods[: len(tables.UE5_BASE.classes["AActor"])] == tables.UE5_BASE.classes["AActor"]
        assert methods[-3:] == ("GetActorNameOrLabel", "SetActorLabel", "GetActorGuid")

    def test_umg_include_root_from_5_2(self, knowledge: KnowledgeBase) -> None:
        assert tables.UMG_ROOT not in knowledge.get_include_paths(EngineVersion(5, 1))
        assert tables.UMG_ROOT in knowledge.get_include_paths(EngineVersion(5, 2))
        assert tables.UMG_ROOT in knowledge.get_include_paths(EngineVersion(5, 5))


class TestLookups:
    def test_given_ue4_when_uclass_template_then_uses_uclass_body(
        self, knowledge: KnowledgeBase
    ) -> None:
        template = knowledge.get_macro_template("UCLASS", EngineVersion(4, 27))

        assert "GENERATED_UCLASS_BODY()" in template

    def test_given_ue5_when_uclass_template_then_uses_generated_body(
        self, knowledge: KnowledgeBase
    ) -> None:
        template = knowledge.get_macro_template("UCLASS", EngineVersion(5, 3))

        assert "GENERATED_BODY()" in template
        assert "GENERATED_UCLASS_BODY()" not in template

    def test_given_ue4_when_uenum_template_then_falls_back_without_error(
        self, knowledge: KnowledgeBase
    ) -> None:
        assert isinstance(knowledge.get_macro_template("UENUM", EngineVersion(4, 27)), str)

    def test_given_unknown_class_when_methods_then_empty(self, knowledge: KnowledgeBase) -> None:
        assert knowledge.get_class_methods("UNotAClass", EngineVersion(5, 3)) == ()

    def test_given_empty_table_when_looked_up_then_defaults_used(self) -> None:
        # Given
        empty = KnowledgeBase(profiles={})

        # Then
        assert empty.get_class_methods("AActor", EngineVersion(5, 3)) == tables.DEFAULT_CLASS_METHODS["AActor"]
        assert "GENERATED_UCLASS_BODY()" in empty.get_macro_template("UCLASS", EngineVersion(4, 27))
        assert "GENERATED_BODY()" in empty.get_macro_template("UCLASS", EngineVersion(5, 1))
        assert empty.get_macro_template("UFUNCTION", EngineVersion(5, 1)).startswith("UFUNCTION")
        assert empty.get_macro_template("UNKNOWN", EngineVersion(5, 1)) == ""

    def test_given_empty_table_when_include_paths_then_grow_with_version(self) -> None:
        empty = KnowledgeBase(profiles={})

        ue4 = empty.get_include_paths(EngineVersion(4, 27))
        ue50 = empty.get_include_paths(EngineVersion(5, 0))
        ue52 = empty.get_include_paths(EngineVersion(5, 2))

        assert tables.ENGINE_CLASSES_ROOT not in ue4
        assert tables.ENGINE_CLASSES_ROOT in ue50
        assert tables.UMG_ROOT not in ue50
        assert tables.UMG_ROOT in ue52
