"""
Session Controller - the stateful side of a practice session.

Owns the active set's in-memory statistics and the "current card". The UI
adapter calls the plain methods below and forwards exactly two timed signals
into the core: a user submission and the response deadline.

States: IDLE -> (start_next) -> AWAITING_ANSWER -> (submit/deadline) -> IDLE
"""

import logging
import random
import time
from typing import Callable, Dict, List, Optional, Union

from ..config import Config
from ..errors import PersistenceError, SchedulerExhausted, SetLoadError
from ..models import (
    Card,
    EvaluationResult,
    Outcome,
    SessionSnapshot,
    SessionState,
    SetSummary,
)
from ..services.audio_service import AudioResolver
from ..services.repository import ProficiencyStore
from ..services.set_provider import BaseSetProvider, SetProviderRegistry, build_entries
from ..utils.helpers import clamp_certainty, clamp_time
from .evaluator import AnswerEvaluator
from .scheduler import Scheduler
from .stats import aggregate, format_summary, status_lines

logger = logging.getLogger(__name__)


class SessionController:
    """
    Orchestrates scheduler, evaluator and store for one user.

    Usage:
        session = SessionController(store, registry)
        session.activate("German::Articles")
        snap = session.start_next()          # arm deadline timer for snap.deadline_seconds
        snap = session.submit_answer("der")  # or session.on_deadline_elapsed()
    """

    def __init__(
        self,
        store: ProficiencyStore,
        providers: Optional[Union[SetProviderRegistry, BaseSetProvider]] = None,
        audio: Optional[AudioResolver] = None,
        scheduler: Optional[Scheduler] = None,
        evaluator: Optional[AnswerEvaluator] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        response_deadline: float = Config.RESPONSE_DEADLINE,
        feedback_hold: float = Config.FEEDBACK_HOLD,
    ):
        """
        Initialize the session.

        Args:
            store: Durable proficiency storage
            providers: Registry or single provider used when activate() gets no provider
            audio: Resolver for card audio (no audio if omitted)
            scheduler: Card selection strategy
            evaluator: Answer evaluation strategy
            clock: Source of Unix time, injectable for tests
            rng: Random source for tie breaking, injectable for tests
            response_deadline: Seconds allowed per question
            feedback_hold: Seconds "next" stays unavailable after a wrong answer
        """
        self.store = store
        self.providers = providers
        self.audio = audio
        self.scheduler = scheduler or Scheduler()
        self.evaluator = evaluator or AnswerEvaluator()
        self.clock = clock
        self.rng = rng or random.Random()
        self.response_deadline = response_deadline
        self.feedback_hold = feedback_hold

        self._state: SessionState = SessionState.IDLE
        self._set_name: Optional[str] = None
        self._cards: List[Card] = []
        self._audio_paths: Dict[int, str] = {}
        self._current: Optional[Card] = None
        self._started_at: float = 0.0
        self._last_result: Optional[EvaluationResult] = None

    # ==================== Properties ====================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def set_name(self) -> Optional[str]:
        return self._set_name

    @property
    def cards(self) -> List[Card]:
        """Snapshot of the active set's cards in ordinal order."""
        return list(self._cards)

    @property
    def current(self) -> Optional[Card]:
        return self._current

    # ==================== Commands ====================

    def activate(self, set_name: str, provider: Optional[BaseSetProvider] = None) -> SessionSnapshot:
        """
        Load a set and its stored statistics.

        Raises:
            SetLoadError: if the set cannot be loaded; the previous set stays active
        """
        provider = provider or self._resolve_provider(set_name)
        entries = build_entries(set_name, provider.get_set(set_name))

        try:
            records = self.store.load_all(set_name)
        except PersistenceError as e:
            logger.warning("Using default statistics for '%s': %s", set_name, e)
            records = {}

        cards = []
        for card_id, entry in enumerate(entries):
            card = Card.from_entry(card_id, entry, records.get(card_id))
            cards.append(card.with_stats(
                certainty=clamp_certainty(card.certainty),
                time_to_answer=clamp_time(card.time_to_answer),
            ))

        audio_paths: Dict[int, str] = {}
        if self.audio is not None:
            for card in cards:
                path = self.audio.resolve_ref(card.audio_ref)
                if path:
                    audio_paths[card.id] = path

        if self._state is SessionState.AWAITING_ANSWER:
            logger.debug("Dropping unanswered card %d of '%s'", self._current.id, self._set_name)

        self._set_name = set_name
        self._cards = cards
        self._audio_paths = audio_paths
        self._current = None
        self._last_result = None
        self._state = SessionState.IDLE

        restored = sum(1 for card_id in records if 0 <= card_id < len(cards))
        logger.info("Activated set '%s': %d cards, %d with history", set_name, len(cards), restored)

        snapshot = self._snapshot()
        snapshot.can_advance = True
        return snapshot

    def start_next(self) -> SessionSnapshot:
        """
        Select the next card and start waiting for an answer.

        Raises:
            SchedulerExhausted: if no set is active or the set has no cards
        """
        if self._state is SessionState.AWAITING_ANSWER:
            logger.debug("start_next ignored, card %d still awaiting an answer", self._current.id)
            return self._snapshot()
        if not self._cards:
            raise SchedulerExhausted("No active set to select from")

        now = self.clock()
        self._current = self.scheduler.select_next(self._cards, now, self.rng)
        self._started_at = now
        self._last_result = None
        self._state = SessionState.AWAITING_ANSWER

        snapshot = self._snapshot()
        snapshot.deadline_seconds = self.response_deadline
        return snapshot

    def submit_answer(self, text: str) -> Optional[SessionSnapshot]:
        """User submitted an answer. Returns None if nothing was awaiting one."""
        return self._evaluate(text, "submission")

    def on_deadline_elapsed(self, pending_text: str = "") -> Optional[SessionSnapshot]:
        """
        The response deadline fired; evaluate whatever text is pending.

        Returns None if the question was already answered.
        """
        return self._evaluate(pending_text, "deadline")

    def aggregate_stats(self) -> SetSummary:
        """
        Mean certainty and time-to-answer of the active set.

        Raises:
            EmptySetError: if no set is active
        """
        return aggregate(self._cards)

    def snapshot(self) -> SessionSnapshot:
        """Current display state without changing anything."""
        return self._snapshot()

    def close(self) -> None:
        """End the session. An unanswered card is simply dropped."""
        self._current = None
        self._state = SessionState.IDLE

    # ==================== Internals ====================

    def _resolve_provider(self, set_name: str) -> BaseSetProvider:
        if isinstance(self.providers, SetProviderRegistry):
            return self.providers.provider_for(set_name)
        if isinstance(self.providers, BaseSetProvider):
            return self.providers
        raise SetLoadError(f"No set provider available for '{set_name}'")

    def _evaluate(self, text: str, source: str) -> Optional[SessionSnapshot]:
        if self._state is not SessionState.AWAITING_ANSWER:
            logger.debug("Ignoring %s, no card awaiting an answer", source)
            return None

        now = self.clock()
        result = self.evaluator.evaluate(
            self._current,
            text,
            now - self._started_at,
            self._cards,
            now,
        )

        self._replace(result.card)
        persisted = self._persist(result.card)
        if result.peer is not None:
            self._replace(result.peer)
            persisted = self._persist(result.peer) and persisted

        self._current = None
        self._last_result = result
        self._state = SessionState.IDLE

        snapshot = self._snapshot()
        snapshot.persisted = persisted
        snapshot.cancel_deadline = True
        if result.outcome is Outcome.CORRECT:
            snapshot.can_advance = True
        else:
            snapshot.feedback_hold_seconds = self.feedback_hold
        return snapshot

    def _replace(self, card: Card) -> None:
        self._cards[card.id] = card

    def _persist(self, card: Card) -> bool:
        try:
            saved = self.store.save(
                self._set_name,
                card.id,
                card.certainty,
                card.time_to_answer,
                card.last_seen,
            )
        except PersistenceError as e:
            logger.warning("Statistics for card %d not saved: %s", card.id, e)
            return False
        if not saved:
            logger.warning("Statistics for card %d not saved", card.id)
        return saved

    def _snapshot(self) -> SessionSnapshot:
        snapshot = SessionSnapshot(state=self._state, set_name=self._set_name)

        card = self._current
        result = self._last_result
        if card is None and result is not None:
            card = result.card
        if card is not None:
            snapshot.card_id = card.id
            snapshot.question = card.question
            snapshot.answer = card.answer

        if result is not None:
            snapshot.outcome = result.outcome
            if result.is_correct:
                snapshot.answer_time = round(result.elapsed_seconds, 1)
            else:
                snapshot.reveal_answer = True
            snapshot.audio_path = self._audio_paths.get(result.card.id)

        if self._cards:
            snapshot.certainties = [c.certainty for c in self._cards]
            snapshot.status_lines = status_lines(self._cards)
            snapshot.summary = format_summary(self._set_name, aggregate(self._cards))
        return snapshot
