"""In-memory report storage."""

from __future__ import annotations

import threading
from pathlib import Path

from app.reports.models import Report


class ReportStore:
    """Keyed reports and rendered-artifact locations for the process lifetime.

    Nothing is evicted and nothing survives a restart.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reports: dict[str, Report] = {}
        self._artifacts: dict[str, Path] = {}

    def save(self, report_id: str, report: Report) -> None:
        with self._lock:
            self._reports[report_id] = report

    def get(self, report_id: str) -> Report | None:
        with self._lock:
            return self._reports.get(report_id)

    def attach_artifact(self, report_id: str, path: Path) -> None:
        with self._lock:
            if report_id not in self._reports:
                raise KeyError(report_id)
            self._artifacts[report_id] = path

    def artifact_path(self, report_id: str) -> Path | None:
        with self._lock:
            return self._artifacts.get(report_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)
