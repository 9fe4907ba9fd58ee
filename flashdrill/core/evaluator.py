"""
Answer evaluation.

Applies the outcome of one answer attempt to the card's statistics. A wrong
answer that matches another card's answer also nudges that card's certainty
down, since the user evidently mixed the two up.

The evaluator performs no I/O: updated cards are returned and the caller
persists them.
"""

import logging
import math
import time
from typing import Optional, Sequence

from ..config import Config
from ..models import Card, EvaluationResult, Outcome
from ..utils.helpers import clamp_certainty, clamp_time, ema

logger = logging.getLogger(__name__)


class AnswerEvaluator:
    """Updates card statistics from answer attempts."""

    def __init__(
        self,
        latency_rate: float = Config.CORRECT_RATE,
        certainty_rate: float = Config.CERTAINTY_RATE,
        peer_rate: float = Config.PEER_RATE,
    ):
        self.latency_rate = latency_rate
        self.certainty_rate = certainty_rate
        self.peer_rate = peer_rate

    @staticmethod
    def is_correct(card: Card, submitted_text: str) -> bool:
        """Exact comparison, case and whitespace included."""
        return submitted_text == card.answer

    def find_peer(self, current: Card, submitted_text: str, cards: Sequence[Card]) -> Optional[Card]:
        """First other card, in set order, whose answer equals the submission."""
        for card in cards:
            if card.id != current.id and card.answer == submitted_text:
                return card
        return None

    def evaluate(
        self,
        current: Card,
        submitted_text: str,
        elapsed_seconds: float,
        peer_lookup: Sequence[Card],
        now: Optional[float] = None,
    ) -> EvaluationResult:
        """
        Evaluate one answer attempt.

        Args:
            current: The card that was asked
            submitted_text: What the user entered (empty on timeout)
            elapsed_seconds: Time from presentation to the answer event
            peer_lookup: The whole active set, used for the peer penalty
            now: Unix time of the event (``time.time()`` if omitted)

        Returns:
            EvaluationResult with the updated card and, when penalised, the peer
        """
        if now is None:
            now = time.time()
        last_seen = int(math.floor(now))
        elapsed = clamp_time(elapsed_seconds)
        certainty = clamp_certainty(current.certainty)

        if self.is_correct(current, submitted_text):
            updated = current.with_stats(
                time_to_answer=clamp_time(
                    ema(clamp_time(current.time_to_answer), elapsed, self.latency_rate)
                ),
                certainty=clamp_certainty(
                    ema(certainty, Config.CERTAINTY_MAX, self.certainty_rate)
                ),
                last_seen=last_seen,
            )
            logger.debug("Card %d correct in %.1fs, certainty %.1f", current.id, elapsed, updated.certainty)
            return EvaluationResult(Outcome.CORRECT, updated, None, elapsed)

        updated = current.with_stats(
            certainty=clamp_certainty(ema(certainty, Config.CERTAINTY_MIN, self.certainty_rate)),
            time_to_answer=clamp_time(current.time_to_answer),
            last_seen=last_seen,
        )
        logger.debug("Card %d incorrect, certainty %.1f", current.id, updated.certainty)

        peer = self.find_peer(current, submitted_text, peer_lookup)
        if peer is not None:
            peer = peer.with_stats(
                certainty=clamp_certainty(
                    ema(clamp_certainty(peer.certainty), Config.CERTAINTY_MIN, self.peer_rate)
                ),
            )
            logger.info(
                "Answer for card %d matched card %d, certainty lowered to %.1f",
                current.id, peer.id, peer.certainty,
            )

        return EvaluationResult(Outcome.INCORRECT, updated, peer, elapsed)
