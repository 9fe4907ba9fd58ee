"""Practice core: scheduling, answer evaluation, statistics and the session."""

from .scheduler import Scheduler
from .evaluator import AnswerEvaluator
from .stats import aggregate, format_status_line, format_summary, status_lines
from .session import SessionController

__all__ = [
    'Scheduler',
    'AnswerEvaluator',
    'aggregate',
    'format_status_line',
    'format_summary',
    'status_lines',
    'SessionController',
]
