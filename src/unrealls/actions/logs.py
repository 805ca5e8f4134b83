"""Engine log analysis - classify log lines into issues and render a report."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger()

LOG_SUFFIX = ".log"

# Relative to the project root
LOG_DIRECTORIES = (
    Path("Saved") / "Logs",
    Path("Intermediate/Build/Win64/UnrealHeaderTool/Development/Engine/Logs"),
)

RULE_WIDTH = 50


class LogType(Enum):
    PERFORMANCE = "Performance"
    MEMORY = "Memory"
    ERROR = "Error"
    BLUEPRINT = "Blueprint"
    WARNING = "Warning"


class LogSeverity(Enum):
    """Issue severity, most severe first."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class LogRule:
    """Patterns for one log type. Only the first matching pattern counts."""

    type: LogType
    severity: LogSeverity
    suggestion: str
    patterns: tuple[re.Pattern[str], ...]


LOG_RULES: tuple[LogRule, ...] = (
    LogRule(
        LogType.PERFORMANCE,
        LogSeverity.MEDIUM,
        "Profile the reported section with Unreal Insights",
        (
            re.compile(r"LogStats:\s+(.+)\s+took\s+(\d+\.?\d*)ms"),
            re.compile(r"LogRenderer:\s+Frame\s+time:\s+(\d+\.?\d*)ms"),
            re.compile(r"LogGameThread:\s+(.+)\s+(\d+\.?\d*)ms"),
            re.compile(r"LogSlate:\s+Slow\s+widget\s+update.*(\d+\.?\d*)ms"),
        ),
    ),
    LogRule(
        LogType.MEMORY,
        LogSeverity.HIGH,
        "Check object lifetimes and UPROPERTY references held by the reported code",
        (
            re.compile(r"LogMemory:\s+(\d+)\s+bytes\s+leaked"),
            re.compile(r"LogGC:\s+Garbage\s+collection\s+took\s+(\d+\.?\d*)ms"),
            re.compile(r"LogMemory:\s+Out\s+of\s+memory"),
            re.compile(r"LogMemory:\s+Allocation\s+failed.*size:\s+(\d+)"),
        ),
    ),
    LogRule(
        LogType.ERROR,
        LogSeverity.HIGH,
        "Check the related code section",
        (
            re.compile(r"LogTemp:\s+Error:\s+(.+)"),
            re.compile(r"LogCore:\s+Error:\s+(.+)"),
            re.compile(r"LogBlueprint:\s+Error:\s+(.+)"),
            re.compile(r"LogCompile:\s+Error:\s+(.+)"),
            re.compile(r"Error:\s+(.+)"),
        ),
    ),
    LogRule(
        LogType.BLUEPRINT,
        LogSeverity.MEDIUM,
        "Open the Blueprint and recompile it to see the failing node",
        (
            re.compile(r"LogBlueprint:\s+(.+)\s+failed\s+to\s+compile"),
            re.compile(r"LogBlueprintUserMessages:\s+(.+)"),
            re.compile(r"LogBlueprint:\s+Warning:\s+(.+)"),
            re.compile(r"Blueprint\s+compile\s+error:\s+(.+)"),
        ),
    ),
    LogRule(
        LogType.WARNING,
        LogSeverity.LOW,
        "Check the related code section",
        (
            re.compile(r"LogTemp:\s+Warning:\s+(.+)"),
            re.compile(r"LogCore:\s+Warning:\s+(.+)"),
            re.compile(r"Warning:\s+(.+)"),
        ),
    ),
)


@dataclass
class LogIssue:
    """One classified log line."""

    type: LogType
    severity: LogSeverity
    message: str
    file: str
    line: int
    suggestion: str

    def format(self) -> str:
        return (
            f"// File: {self.file}:{self.line}\n"
            f"// Type: {self.type.value}, Severity: {self.severity.value}\n"
            f"// Message: {self.message}\n"
            f"// Suggestion: {self.suggestion}\n"
        )


def classify_line(text: str, file: str, line: int) -> list[LogIssue]:
    """Issues for one log line: at most one per log type."""
    issues: list[LogIssue] = []
    for rule in LOG_RULES:
        for pattern in rule.patterns:
            match = pattern.search(text)
            if match:
                issues.append(
                    LogIssue(
                        type=rule.type,
                        severity=rule.severity,
                        message=match.group(0),
                        file=file,
                        line=line,
                        suggestion=rule.suggestion,
                    )
                )
                break
    return issues


def find_log_files(project_path: Path) -> list[Path]:
    files: list[Path] = []
    for directory in LOG_DIRECTORIES:
        log_dir = project_path / directory
        try:
            entries = sorted(log_dir.iterdir())
        except OSError:
            continue
        files.extend(p for p in entries if p.suffix == LOG_SUFFIX and p.is_file())
    return files


def analyze_log_file(path: Path) -> list[LogIssue]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("log_read_failed", path=str(path), error=str(e))
        return []
    issues: list[LogIssue] = []
    for number, line in enumerate(text.splitlines(), start=1):
        issues.extend(classify_line(line, str(path), number))
    return issues


def analyze_project(project_path: Path) -> list[LogIssue]:
    issues: list[LogIssue] = []
    for path in find_log_files(project_path):
        issues.extend(analyze_log_file(path))
    logger.info("logs_analyzed", project=str(project_path), issues=len(issues))
    return issues


def render_report(issues: Iterable[LogIssue], generated_at: datetime | None = None) -> str:
    """Render *issues* grouped by severity, most severe group first."""
    issues = list(issues)
    generated_at = generated_at or datetime.now(timezone.utc)

    lines = [
        "/*",
        " * UNREAL ENGINE LOG ANALYSIS REPORT",
        f" * Generated: {generated_at.isoformat(timespec='seconds')}",
        f" * Total Issues Found: {len(issues)}",
        " * ==========================================",
        " */",
        "",
    ]
    for severity in LogSeverity:
        group = [issue for issue in issues if issue.severity is severity]
        if not group:
            continue
        lines.append(f"// {severity.value.upper()} SEVERITY ISSUES ({len(group)})")
        lines.append("// " + "=" * RULE_WIDTH)
        lines.extend(issue.format() for issue in group)
        lines.append("")
    return "\n".join(lines) + "\n"
