"""Utils module."""

from .helpers import (
    clamp,
    clamp_certainty,
    clamp_time,
    ema,
    ensure_dir,
    set_table_name,
    set_title,
)
from .logger import setup_logger

__all__ = [
    'clamp',
    'clamp_certainty',
    'clamp_time',
    'ema',
    'ensure_dir',
    'set_table_name',
    'set_title',
    'setup_logger',
]
