"""FlashDrill - adaptive flashcard trainer"""

__version__ = "1.0.0"
__author__ = "FlashDrill Team"

from .config import Config, SettingsManager
from .core import AnswerEvaluator, Scheduler, SessionController, aggregate
from .errors import (
    EmptySetError,
    FlashDrillError,
    PersistenceError,
    SchedulerExhausted,
    SetLoadError,
)
from .models import Card, EvaluationResult, Outcome, SessionSnapshot, SessionState, SetSummary
from .services import (
    AudioResolver,
    CSVSetProvider,
    InMemoryProficiencyStore,
    SetProviderRegistry,
    SQLiteProficiencyStore,
    StaticSetProvider,
)

__all__ = [
    'Config',
    'SettingsManager',
    'AnswerEvaluator',
    'Scheduler',
    'SessionController',
    'aggregate',
    'EmptySetError',
    'FlashDrillError',
    'PersistenceError',
    'SchedulerExhausted',
    'SetLoadError',
    'Card',
    'EvaluationResult',
    'Outcome',
    'SessionSnapshot',
    'SessionState',
    'SetSummary',
    'AudioResolver',
    'CSVSetProvider',
    'InMemoryProficiencyStore',
    'SetProviderRegistry',
    'SQLiteProficiencyStore',
    'StaticSetProvider',
]
