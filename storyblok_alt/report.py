"""Run report persistence."""

from __future__ import annotations

import json
import logging
import time
from collections import Counter
from pathlib import Path
from typing import Dict, Optional, Sequence

from .models import ProcessResult, ProcessStatus

logger = logging.getLogger("storyblok_alt")

REPORT_PREFIX = "assets_report"


def current_millis() -> int:
    return int(time.time() * 1000)


def report_path(directory: Path, started_at_ms: int) -> Path:
    return directory / f"{REPORT_PREFIX}_{started_at_ms}.json"


def write_report(
    results: Sequence[ProcessResult],
    directory: Path,
    started_at_ms: Optional[int] = None,
) -> Path:
    """Write results as a JSON array named after the run's start time.

    Write failures are not caught; the caller treats them as fatal.
    """
    if started_at_ms is None:
        started_at_ms = current_millis()
    directory.mkdir(parents=True, exist_ok=True)
    path = report_path(directory, started_at_ms)
    payload = [result.to_dict() for result in results]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Report saved: %s", path)
    return path


def summarize(results: Sequence[ProcessResult]) -> Dict[str, int]:
    """Count results per status, listing every status even when zero."""
    counts = Counter(result.status for result in results)
    return {status.value: counts.get(status, 0) for status in ProcessStatus}
