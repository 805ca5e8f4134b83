"""Compile error interpretation from the build tool log."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger()

BUILD_LOG_PATH = Path("Saved") / "Logs" / "UnrealBuildTool.log"
ERROR_MARKER = "error:"
MAX_REPORTED_ERRORS = 20
RULE_WIDTH = 50

_LOCATION_RE = re.compile(r"(?P<file>[^\s:()]+\.(?:h|hpp|cpp|cc|cs))(?:\((?P<paren>\d+)|:(?P<colon>\d+))")


class ErrorCategory(Enum):
    UNKNOWN = "Unknown"
    MISSING_INCLUDE = "MissingInclude"
    MEMBER_NOT_FOUND = "MemberNotFound"
    UNREAL_MACRO = "UnrealMacro"
    MODULE_NOT_FOUND = "ModuleNotFound"


@dataclass(frozen=True)
class ErrorRule:
    """A known error shape. ``{1}`` in the solution is the first captured group."""

    pattern: re.Pattern[str]
    category: ErrorCategory
    solution: str
    confidence: float


ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(
        re.compile(r"error: use of undeclared identifier '(\w+)'"),
        ErrorCategory.MISSING_INCLUDE,
        "Add #include for '{1}' or check spelling. "
        "Common includes for '{1}': CoreMinimal.h, Engine.h",
        0.9,
    ),
    ErrorRule(
        re.compile(r"error: no member named '(\w+)' in"),
        ErrorCategory.MEMBER_NOT_FOUND,
        "Member '{1}' does not exist. Check spelling, access level, or add forward declaration",
        0.8,
    ),
    ErrorRule(
        re.compile(r"error: UCLASS\(\) must be the first thing"),
        ErrorCategory.UNREAL_MACRO,
        "Move UCLASS() macro to immediately before class declaration",
        0.95,
    ),
    ErrorRule(
        re.compile(r"error: GENERATED_BODY\(\) not found"),
        ErrorCategory.UNREAL_MACRO,
        "Add GENERATED_BODY() as first line inside UCLASS body",
        0.95,
    ),
    ErrorRule(
        re.compile(r"error: Cannot find definition for module '(\w+)'"),
        ErrorCategory.MODULE_NOT_FOUND,
        "Add '{1}' to PublicDependencyModuleNames in your .Build.cs file",
        0.9,
    ),
)

UNKNOWN_SOLUTION = "Manual investigation required"


@dataclass
class CompileError:
    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN
    solution: str = UNKNOWN_SOLUTION
    confidence: float = 0.0
    file: str = ""
    line: int = 0

    def format(self) -> str:
        location = f"{self.file}:{self.line}" if self.file else "unknown location"
        return (
            f"// Error in {location}\n"
            f"// Category: {self.category.value}\n"
            f"// Confidence: {round(self.confidence * 100)}%\n"
            f"// Message: {self.message}\n"
            f"// Solution: {self.solution}\n"
        )


def interpret_error(message: str) -> CompileError:
    """Match *message* against the known rules; the first match wins."""
    error = CompileError(message=message.strip())

    location = _LOCATION_RE.search(message)
    if location:
        error.file = location.group("file")
        error.line = int(location.group("paren") or location.group("colon"))

    for rule in ERROR_RULES:
        match = rule.pattern.search(message)
        if match:
            error.category = rule.category
            error.confidence = rule.confidence
            error.solution = rule.solution
            if match.groups():
                error.solution = error.solution.replace("{1}", match.group(1))
            break
    return error


def extract_error_lines(project_path: Path) -> list[str]:
    log_path = project_path / BUILD_LOG_PATH
    try:
        text = log_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []
    return [line for line in text.splitlines() if ERROR_MARKER in line]


def analyze_errors(project_path: Path) -> list[CompileError]:
    errors = [interpret_error(line) for line in extract_error_lines(project_path)]
    logger.info("compile_errors_analyzed", project=str(project_path), errors=len(errors))
    return errors


def render_report(errors: Iterable[CompileError]) -> str:
    errors = list(errors)
    lines = [
        "/*",
        " * COMPILE ERROR ANALYSIS & SOLUTIONS",
        f" * Found {len(errors)} compile errors",
        " * ==========================================",
        " */",
        "",
    ]
    for number, error in enumerate(errors[:MAX_REPORTED_ERRORS], start=1):
        lines.append(f"// ERROR #{number} [{error.category.value}]")
        lines.append("// " + "-" * RULE_WIDTH)
        lines.append(error.format())
    return "\n".join(lines) + "\n"
