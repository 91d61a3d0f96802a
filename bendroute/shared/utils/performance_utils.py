"""Timing helpers used for search iteration logging."""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class TimingResult:
    """Wall-clock and resident memory figures of a timed block."""
    label: str
    elapsed_ms: float = 0.0
    rss_delta_mb: float = 0.0


def current_rss_mb() -> float:
    """Resident set size of this process in MB."""
    return psutil.Process().memory_info().rss / (1024 * 1024)


@contextmanager
def timing_context(label: str, log: Optional[logging.Logger] = None,
                   level: int = logging.DEBUG) -> Iterator[TimingResult]:
    """Time the wrapped block and log the result.

    The yielded ``TimingResult`` is filled in when the block exits, so callers
    can read ``elapsed_ms`` afterwards.
    """
    log = log or logger
    result = TimingResult(label)
    rss_before = current_rss_mb()
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.elapsed_ms = (time.perf_counter() - start) * 1000.0
        result.rss_delta_mb = current_rss_mb() - rss_before
        log.log(level, f"{label}: {int(result.elapsed_ms)} ms "
                       f"(rss {result.rss_delta_mb:+.1f} MB)")
