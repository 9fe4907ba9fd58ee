"""Utility functions."""

import hashlib
import re
from pathlib import Path

from ..config import Config


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def clamp_certainty(value: float) -> float:
    """Clamp a certainty into its [0, 100] domain."""
    return clamp(float(value), Config.CERTAINTY_MIN, Config.CERTAINTY_MAX)


def clamp_time(value: float) -> float:
    """Times are never negative."""
    return max(0.0, float(value))


def ema(current: float, target: float, rate: float) -> float:
    """Exponential moving average step: move ``current`` toward ``target``."""
    return current + rate * (target - current)


def set_title(set_name: str) -> str:
    """Display title of a set: ``German::Articles`` -> ``German -> Articles``."""
    return set_name.replace("::", " -> ")


def set_table_name(set_name: str) -> str:
    """
    SQLite table holding a set's statistics.

    The readable part is lossy (``a::b``, ``a_b`` and ``a-b`` all sanitise
    alike), so a digest of the raw name keeps tables of distinct sets apart.
    """
    readable = re.sub(r"\W", "_", set_name.replace("::", "_"))
    digest = hashlib.sha1(set_name.encode("utf-8")).hexdigest()[:8]
    return f"set_{readable}_{digest}"


def ensure_dir(path: str) -> None:
    """Ensure directory exists."""
    Path(path).mkdir(parents=True, exist_ok=True)
