"""Symbol extraction from engine header text.

Pattern based, not a parser: it finds exported class declarations and the
declaration-only method signatures that follow them.
"""

from __future__ import annotations

import re

CLASS_DECL_RE = re.compile(r"class\s+\w+_API\s+(\w+)\s*:\s*public")
METHOD_DECL_RE = re.compile(r"\s+(\w+)\s*\([^)]*\)\s*(?:const)?\s*(?:override)?\s*;")

DESTRUCTOR_MARKER = "~"
OPERATOR_KEYWORD = "operator"


def is_method_name(name: str, class_name: str) -> bool:
    """Engine naming convention filter for a candidate method name."""
    return (
        name != class_name
        and not name.startswith(DESTRUCTOR_MARKER)
        and name != OPERATOR_KEYWORD
        and name[:1].isupper()
    )


def extract_methods(text: str, class_name: str) -> list[str]:
    """Method names declared in *text*, in order of appearance."""
    return [
        match.group(1)
        for match in METHOD_DECL_RE.finditer(text)
        if is_method_name(match.group(1), class_name)
    ]


def extract_classes(content: str) -> dict[str, list[str]]:
    """Map each exported class in *content* to its declared methods.

    Methods are taken from the rest of the file after the class declaration.
    Classes with no accepted methods are left out; a class declared twice
    keeps the later result.
    """
    classes: dict[str, list[str]] = {}
    for match in CLASS_DECL_RE.finditer(content):
        class_name = match.group(1)
        methods = extract_methods(content[match.end() :], class_name)
        if methods:
            classes[class_name] = methods
    return classes
