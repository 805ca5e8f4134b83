"""Source text generators: UCLASS headers and Blueprint-callable wrappers."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from unrealls.engine.models import EngineVersion

GAMEPLAY_CATEGORY = "Gameplay"
COMPONENTS_CATEGORY = "Components"

# Base classes with a known engine header; others include "<Base>.h"
BASE_CLASS_HEADERS: dict[str, str] = {
    "AActor": "GameFramework/Actor.h",
    "APawn": "GameFramework/Pawn.h",
    "ACharacter": "GameFramework/Character.h",
    "UObject": "UObject/Object.h",
    "UActorComponent": "Components/ActorComponent.h",
    "USceneComponent": "Components/SceneComponent.h",
}

# Bases that get BeginPlay/Tick overrides
TICKING_BASES = frozenset({"AActor", "APawn", "ACharacter"})

_DECLARATION_RE = re.compile(
    r"^\s*(?:(?:virtual|static|inline|FORCEINLINE)\s+)*"
    r"(?P<ret>(?:const\s+)?[\w:<>,]+(?:\s*[*&])?)\s+(?P<name>\w+)\s*\((?P<params>[^)]*)\)"
)
_NON_TYPES = frozenset({"return", "else", "new", "delete", "throw", "case", "goto"})


@dataclass
class ClassTemplate:
    class_name: str
    base_class: str
    module_name: str = "GAME"
    blueprint_type: bool = True
    blueprintable: bool = True
    components: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)

    @property
    def specifiers(self) -> str:
        parts = []
        if self.blueprint_type:
            parts.append("BlueprintType")
        if self.blueprintable:
            parts.append("Blueprintable")
        return ", ".join(parts)


def _component_member(component: str) -> str:
    """``UStaticMeshComponent`` → ``StaticMeshComponent``."""
    name = component[1:] if component[:1] in ("U", "A") else component
    if name.endswith("Component"):
        name = name[: -len("Component")]
    return f"{name}Component"


def generate_uclass(template: ClassTemplate, version: EngineVersion) -> str:
    """Header text for a new UCLASS. UE4 versions use ``GENERATED_UCLASS_BODY()``."""
    base_header = BASE_CLASS_HEADERS.get(template.base_class, f"{template.base_class}.h")
    body_macro = "GENERATED_UCLASS_BODY()" if version.is_ue4 else "GENERATED_BODY()"

    out = [
        "#pragma once",
        "",
        '#include "CoreMinimal.h"',
        f'#include "{base_header}"',
        f'#include "{template.class_name}.generated.h"',
        "",
        f"UCLASS({template.specifiers})",
        f"class {template.module_name}_API {template.class_name} : public {template.base_class}",
        "{",
        f"\t{body_macro}",
        "",
        "public:",
        f"\t{template.class_name}();",
        "",
    ]

    if template.base_class in TICKING_BASES:
        out += [
            "protected:",
            "\tvirtual void BeginPlay() override;",
            "",
            "public:",
            "\tvirtual void Tick(float DeltaTime) override;",
            "",
        ]

    for component in template.components:
        out += [
            f'\tUPROPERTY(VisibleAnywhere, BlueprintReadOnly, Category = "{COMPONENTS_CATEGORY}")',
            f"\tclass {component}* {_component_member(component)};",
            "",
        ]

    for function in template.functions:
        out += [
            f'\tUFUNCTION(BlueprintCallable, Category = "{GAMEPLAY_CATEGORY}")',
            f"\tvoid {function}();",
            "",
        ]

    out.append("};")
    return "\n".join(out)


@dataclass(frozen=True)
class FunctionSignature:
    return_type: str
    name: str
    parameters: tuple[str, ...] = ()

    @property
    def argument_names(self) -> list[str]:
        return [parameter_name(p) for p in self.parameters]


def split_parameters(text: str) -> tuple[str, ...]:
    text = text.strip()
    if not text or text == "void":
        return ()
    return tuple(p.strip() for p in text.split(",") if p.strip())


def parameter_name(parameter: str) -> str:
    """Declared name of one parameter, dropping any default value.

    >>> parameter_name("const FVector& Location = FVector::ZeroVector")
    'Location'
    """
    declaration = parameter.split("=", 1)[0].strip()
    name = re.split(r"[\s*&]+", declaration)[-1]
    return name


def parse_function_declaration(line: str) -> FunctionSignature | None:
    """Parse ``<ret> <Name>(<params>)`` from one source line, or None."""
    match = _DECLARATION_RE.match(line)
    if not match or match.group("ret") in _NON_TYPES:
        return None
    return FunctionSignature(
        return_type=match.group("ret").strip(),
        name=match.group("name"),
        parameters=split_parameters(match.group("params")),
    )


def blueprint_wrapper(function: FunctionSignature) -> str:
    """A BlueprintCallable ``Blueprint_<Name>`` forwarding to *function*."""
    params = ", ".join(function.parameters)
    args = ", ".join(function.argument_names)
    return (
        f'UFUNCTION(BlueprintCallable, Category = "{GAMEPLAY_CATEGORY}")\n'
        f"{function.return_type} Blueprint_{function.name}({params})\n"
        "{\n"
        f"\t// Blueprint wrapper for {function.name}\n"
        f"\treturn {function.name}({args});\n"
        "}\n"
    )


def wrap_function_at(lines: Sequence[str], line: int) -> str | None:
    """Blueprint wrapper for the declaration on *line*, if there is one."""
    if not 0 <= line < len(lines):
        return None
    function = parse_function_declaration(lines[line])
    return blueprint_wrapper(function) if function else None
