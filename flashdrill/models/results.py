"""Result and snapshot models returned by the practice core."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .card import Card


class Outcome(Enum):
    """Outcome of one answer attempt."""

    CORRECT = "correct"
    INCORRECT = "incorrect"


class SessionState(Enum):
    """States of the practice session."""

    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one answer, with updated card snapshots."""

    outcome: Outcome
    card: Card
    peer: Optional[Card] = None
    elapsed_seconds: float = 0.0

    @property
    def is_correct(self) -> bool:
        return self.outcome is Outcome.CORRECT


@dataclass(frozen=True)
class SetSummary:
    """Mean statistics over a set."""

    mean_certainty: float
    mean_time_to_answer: float
    card_count: int


@dataclass
class SessionSnapshot:
    """
    Everything a display needs after a session command.

    Timer fields are signals for the UI adapter: a value in
    ``deadline_seconds`` or ``feedback_hold_seconds`` means "arm that timer
    for this long"; ``cancel_deadline`` means "disarm the response deadline".
    """

    state: SessionState
    set_name: Optional[str] = None
    card_id: Optional[int] = None
    question: str = ""
    answer: str = ""

    outcome: Optional[Outcome] = None
    answer_time: Optional[float] = None
    reveal_answer: bool = False
    audio_path: Optional[str] = None
    persisted: bool = True

    certainties: List[float] = field(default_factory=list)
    status_lines: List[str] = field(default_factory=list)
    summary: Optional[str] = None

    deadline_seconds: Optional[float] = None
    feedback_hold_seconds: Optional[float] = None
    cancel_deadline: bool = False
    can_advance: bool = False
