"""
Scheduler - picks the next card to practice.

Low-certainty cards come first, ties go to the slowest card, cards seen
within the recency window are held back, and the final pick among equals is
random so the session never falls into a fixed cycle.
"""

import logging
import random
from typing import Callable, List, Optional, Sequence

from ..config import Config
from ..errors import SchedulerExhausted
from ..models import Card

logger = logging.getLogger(__name__)


def _keep_extreme(
    cards: Sequence[Card],
    key: Callable[[Card], float],
    better: Callable[[float, float], bool],
) -> List[Card]:
    """
    Single pass keeping every card that ties for the best ``key``.

    Kept candidates are discarded whenever a strictly better value shows up.
    """
    kept: List[Card] = []
    best: Optional[float] = None
    for card in cards:
        value = key(card)
        if best is None or better(value, best):
            best = value
            kept = [card]
        elif value == best:
            kept.append(card)
    return kept


class Scheduler:
    """Selects the next card from a set's current statistics."""

    def __init__(self, recency_divisor: float = Config.RECENCY_DIVISOR):
        self.recency_divisor = recency_divisor

    def recency_window(self, set_size: int) -> float:
        """Seconds a card stays ineligible after being answered."""
        return set_size / self.recency_divisor

    def candidates(self, cards: Sequence[Card], now: float) -> List[Card]:
        """
        Cards eligible for the next pick.

        Raises:
            SchedulerExhausted: if ``cards`` is empty
        """
        if not cards:
            raise SchedulerExhausted("Cannot select a card from an empty set")

        cutoff = now - self.recency_window(len(cards))
        fresh = [card for card in cards if card.last_seen <= cutoff]
        if not fresh:
            logger.debug("All %d cards inside recency window, ignoring recency", len(cards))
            fresh = list(cards)

        least_certain = _keep_extreme(fresh, lambda c: c.certainty, lambda a, b: a < b)
        return _keep_extreme(least_certain, lambda c: c.time_to_answer, lambda a, b: a > b)

    def select_next(
        self,
        cards: Sequence[Card],
        now: float,
        rng: Optional[random.Random] = None,
    ) -> Card:
        """
        Pick the next card to present.

        Args:
            cards: The active set in ordinal order
            now: Current Unix time
            rng: Random source (module-level ``random`` if omitted)

        Returns:
            The selected card

        Raises:
            SchedulerExhausted: if ``cards`` is empty
        """
        choices = self.candidates(cards, now)
        return (rng or random).choice(choices)
