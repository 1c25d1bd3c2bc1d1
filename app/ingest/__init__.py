"""Ingestion helpers."""

from __future__ import annotations

import json
import pathlib
from typing import Any

SAMPLE_CAPTURE_PATH = pathlib.Path(__file__).with_name("sample_capture.json")


def load_sample_snapshots(limit: int | None = None) -> list[dict[str, Any]]:
    """Load the bundled capture batch used by the dev endpoint and scripts."""
    snapshots = json.loads(SAMPLE_CAPTURE_PATH.read_text())
    if limit:
        return snapshots[:limit]
    return snapshots
