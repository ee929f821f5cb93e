"""Timestamp helpers for log directory names and elapsed-time reporting."""

import time
from datetime import datetime


def now() -> str:
    """
    Current local time as a filesystem-safe stamp.

    Returns:
        Timestamp like "20251114_123456"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def elapsed_since(start: float) -> float:
    """Seconds elapsed since a time.perf_counter() reading, rounded to ms."""
    return round(time.perf_counter() - start, 3)
