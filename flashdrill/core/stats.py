"""Summary statistics over a set, for display only."""

from typing import List, Sequence

from ..errors import EmptySetError
from ..models import Card, SetSummary
from ..utils.helpers import set_title


def aggregate(cards: Sequence[Card]) -> SetSummary:
    """
    Arithmetic mean of certainty and of time-to-answer.

    Raises:
        EmptySetError: if ``cards`` is empty
    """
    count = len(cards)
    if count == 0:
        raise EmptySetError("Cannot aggregate statistics of an empty set")

    return SetSummary(
        mean_certainty=sum(card.certainty for card in cards) / count,
        mean_time_to_answer=sum(card.time_to_answer for card in cards) / count,
        card_count=count,
    )


def format_status_line(card: Card) -> str:
    return f"{card.question}: {card.certainty:.0f} %, {card.time_to_answer:.1f} s"


def status_lines(cards: Sequence[Card]) -> List[str]:
    """One line per card, in set order."""
    return [format_status_line(card) for card in cards]


def format_summary(set_name: str, summary: SetSummary) -> str:
    """Label shown above the status list."""
    return (
        f"{set_title(set_name)}\n"
        f"Certainty = {summary.mean_certainty:.1f} "
        f"Answer Time = {summary.mean_time_to_answer:.1f}"
    )
