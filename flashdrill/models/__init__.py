"""Data models for FlashDrill."""

from .card import AudioRef, Card, SetEntry
from .results import (
    EvaluationResult,
    Outcome,
    SessionSnapshot,
    SessionState,
    SetSummary,
)

__all__ = [
    'AudioRef',
    'Card',
    'SetEntry',
    'EvaluationResult',
    'Outcome',
    'SessionSnapshot',
    'SessionState',
    'SetSummary',
]
