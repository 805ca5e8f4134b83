"""Background scanner that indexes class methods from installed engine headers.

Design:
- One scan per index, started on a daemon thread and never joined
- The class table is shared with completion requests; a lock is held only
  around each single read or write, so readers see partial results while
  the scan is still running
- Per-entry failures are recorded in the ScanReport and the scan moves on
"""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from unrealls.core.walk import WalkOutcome, WalkStatus, walk_files
from unrealls.index.extraction import extract_classes

logger = structlog.get_logger()

DEFAULT_HEADER_SUFFIXES = (".h",)


@dataclass
class ScanReport:
    """Summary of one scan pass."""

    roots_scanned: int = 0
    roots_missing: list[str] = field(default_factory=list)
    files_scanned: int = 0
    classes_found: int = 0
    skipped: int = 0
    errors: list[WalkOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0


class HeaderIndex:
    """Supplementary class → methods table scanned from engine headers."""

    def __init__(
        self,
        install_path: str,
        include_roots: Sequence[str],
        *,
        suffixes: Sequence[str] = DEFAULT_HEADER_SUFFIXES,
        autostart: bool = True,
    ) -> None:
        self._install_path = install_path
        self._include_roots = tuple(include_roots)
        self._suffixes = tuple(suffixes)
        self._classes: dict[str, tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self._complete = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_report: ScanReport | None = None

        if autostart:
            self.start()

    def start(self) -> None:
        """Start the one-shot background scan. Later calls do nothing."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            name="unrealls-header-scan",
            daemon=True,
        )
        self._thread.start()
        logger.info("header_scan_started", install_path=self._install_path)

    def _run(self) -> None:
        try:
            self.scan()
        except Exception as e:
            # Scan failures are logged, never raised into the session
            logger.error("header_scan_failed", error=str(e), exc_info=True)
        finally:
            self._complete.set()

    def scan(self) -> ScanReport:
        """Walk every include root under the install path and index its headers."""
        report = ScanReport()
        start = time.perf_counter()

        if not self._install_path:
            logger.info("header_scan_skipped", reason="no install path")
            self._last_report = report
            self._complete.set()
            return report

        base = Path(self._install_path)
        for include_root in self._include_roots:
            root = base / include_root
            try:
                is_dir = root.is_dir()
            except OSError as e:
                report.errors.append(WalkOutcome(root, WalkStatus.ERRORED, str(e)))
                logger.debug("header_root_error", path=str(root), error=str(e))
                continue
            if not is_dir:
                report.roots_missing.append(include_root)
                continue
            report.roots_scanned += 1
            for outcome in walk_files(root, self._suffixes):
                if outcome.status is WalkStatus.FOUND:
                    self._scan_file(outcome.path, report)
                elif outcome.status is WalkStatus.ERRORED:
                    report.errors.append(outcome)
                    logger.debug("header_walk_error", path=str(outcome.path), error=outcome.reason)
                else:
                    report.skipped += 1

        report.duration_seconds = time.perf_counter() - start
        self._last_report = report
        self._complete.set()
        logger.info(
            "header_scan_complete",
            roots=report.roots_scanned,
            files=report.files_scanned,
            classes=report.classes_found,
            errors=len(report.errors),
            duration=round(report.duration_seconds, 3),
        )
        return report

    def _scan_file(self, path: Path, report: ScanReport) -> None:
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            report.errors.append(WalkOutcome(path, WalkStatus.ERRORED, str(e)))
            return

        report.files_scanned += 1
        for class_name, methods in extract_classes(content).items():
            with self._lock:
                self._classes[class_name] = tuple(methods)
            report.classes_found += 1

    def get_class_methods(self, class_name: str) -> tuple[str, ...]:
        """Scanned methods for *class_name*; empty if unknown or not scanned yet."""
        with self._lock:
            return self._classes.get(class_name, ())

    def class_names(self) -> list[str]:
        with self._lock:
            return sorted(self._classes)

    @property
    def is_complete(self) -> bool:
        return self._complete.is_set()

    @property
    def last_report(self) -> ScanReport | None:
        return self._last_report

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the background scan finishes. Returns False on timeout."""
        return self._complete.wait(timeout)
