"""Header/source pairing: stub missing definitions, or derive declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from unrealls.actions.codegen import split_parameters

HEADER_SUFFIXES = (".h", ".hpp")
SOURCE_SUFFIXES = (".cpp", ".cc")

NOT_PAIRABLE = "// Unable to sync: not a valid header or source file"

_CLASS_RE = re.compile(r"^\s*(?:class|struct)\s+(?:\w+_API\s+)?(\w+)\s*(?::|\{|$)", re.MULTILINE)
_DECLARATION_RE = re.compile(
    r"^[ \t]*(?:(?:virtual|static|inline|FORCEINLINE)[ \t]+)*"
    r"(?P<ret>(?:const[ \t]+)?[\w:<>]+(?:[ \t]*[*&])?)[ \t]+(?P<name>\w+)[ \t]*"
    r"\((?P<params>[^)]*)\)[ \t]*(?P<const>const)?[ \t]*(?:override)?[ \t]*;",
    re.MULTILINE,
)
_CONSTRUCTOR_RE = r"^[ \t]*(?P<name>{cls})[ \t]*\((?P<params>[^)]*)\)[ \t]*;"
_DEFINITION_RE = re.compile(
    r"^(?:(?P<ret>(?:const[ \t]+)?[\w:<>]+(?:[ \t]*[*&])?)[ \t]+)?"
    r"(?P<cls>\w+)::(?P<name>~?\w+)[ \t]*\((?P<params>[^)]*)\)[ \t]*(?P<const>const)?",
    re.MULTILINE,
)
_DEFAULT_VALUE_RE = re.compile(r"\s*=\s*[^,]+")
_NON_TYPES = frozenset({"return", "else", "new", "delete", "throw", "case", "goto"})


@dataclass(frozen=True)
class Member:
    """A member function as written in a declaration or definition."""

    class_name: str
    name: str
    return_type: str = ""
    parameters: tuple[str, ...] = ()
    is_const: bool = False

    @property
    def is_constructor(self) -> bool:
        return self.name == self.class_name

    def definition_stub(self) -> str:
        params = ", ".join(_DEFAULT_VALUE_RE.sub("", p) for p in self.parameters)
        prefix = "" if self.is_constructor else f"{self.return_type} "
        suffix = " const" if self.is_const else ""
        return f"{prefix}{self.class_name}::{self.name}({params}){suffix}\n{{\n}}\n"

    def declaration(self) -> str:
        params = ", ".join(self.parameters)
        prefix = "" if self.is_constructor else f"{self.return_type} "
        suffix = " const" if self.is_const else ""
        return f"\t{prefix}{self.name}({params}){suffix};"


def is_header(path: Path) -> bool:
    return path.suffix in HEADER_SUFFIXES


def is_source(path: Path) -> bool:
    return path.suffix in SOURCE_SUFFIXES


def paired_path(path: Path) -> Path | None:
    """The counterpart of *path*: ``Foo.h`` ↔ ``Foo.cpp``."""
    if is_header(path):
        return path.with_suffix(".cpp")
    if is_source(path):
        return path.with_suffix(".h")
    return None


def header_class_name(content: str) -> str | None:
    match = _CLASS_RE.search(content)
    return match.group(1) if match else None


def extract_declarations(content: str) -> list[Member]:
    """Member function declarations of the first class declared in *content*."""
    class_name = header_class_name(content)
    if class_name is None:
        return []

    members: list[Member] = []
    constructor_re = re.compile(_CONSTRUCTOR_RE.format(cls=re.escape(class_name)), re.MULTILINE)
    for match in constructor_re.finditer(content):
        members.append(
            Member(class_name, class_name, parameters=split_parameters(match.group("params")))
        )
    for match in _DECLARATION_RE.finditer(content):
        if match.group("ret") in _NON_TYPES:
            continue
        members.append(
            Member(
                class_name=class_name,
                name=match.group("name"),
                return_type=match.group("ret").strip(),
                parameters=split_parameters(match.group("params")),
                is_const=bool(match.group("const")),
            )
        )
    return members


def extract_definitions(content: str) -> list[Member]:
    """Out-of-line ``Class::Method(...)`` definitions in *content*."""
    members: list[Member] = []
    for match in _DEFINITION_RE.finditer(content):
        ret = (match.group("ret") or "").strip()
        if ret in _NON_TYPES:
            continue
        members.append(
            Member(
                class_name=match.group("cls"),
                name=match.group("name"),
                return_type=ret,
                parameters=split_parameters(match.group("params")),
                is_const=bool(match.group("const")),
            )
        )
    return members


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def missing_implementations(header: Path) -> str:
    """Stub definitions for header declarations with no definition in the paired source."""
    content = _read(header)
    if content is None:
        return f"// Unable to read {header.name}"

    declared = extract_declarations(content)
    if not declared:
        return f"// No member functions declared in {header.name}"

    source = paired_path(header)
    source_content = _read(source) if source else None
    defined = {(m.class_name, m.name) for m in extract_definitions(source_content or "")}
    missing = [m for m in declared if (m.class_name, m.name) not in defined]

    class_name = declared[0].class_name
    if not missing:
        return f"// {class_name}: all declared functions are implemented"

    target = source.name if source else "source file"
    parts = [f"// Missing implementations for {class_name} in {target}", ""]
    parts.extend(m.definition_stub() for m in missing)
    return "\n".join(parts)


def header_from_source(source: Path) -> str:
    """Declarations for each out-of-line definition in *source*, grouped by class."""
    content = _read(source)
    if content is None:
        return f"// Unable to read {source.name}"

    by_class: dict[str, list[Member]] = {}
    for member in extract_definitions(content):
        by_class.setdefault(member.class_name, []).append(member)
    if not by_class:
        return f"// No definitions found in {source.name}"

    parts: list[str] = []
    for class_name, members in by_class.items():
        parts.append(f"// Declarations for {class_name} from {source.name}")
        parts.extend(m.declaration() for m in members)
        parts.append("")
    return "\n".join(parts)


def sync_header_source(path: Path) -> str:
    if is_header(path):
        return missing_implementations(path)
    if is_source(path):
        return header_from_source(path)
    return NOT_PAIRABLE
