"""Card and set-entry data models."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ..config import Config


@dataclass(frozen=True)
class AudioRef:
    """Reference to a sound file inside an audiobank."""

    audiobank: str
    audio_file: str


@dataclass(frozen=True)
class SetEntry:
    """One raw entry as returned by a set provider."""

    question: str
    answer: str
    audiobank: Optional[str] = None
    audio_file: Optional[str] = None

    @property
    def audio_ref(self) -> Optional[AudioRef]:
        if self.audiobank and self.audio_file:
            return AudioRef(self.audiobank, self.audio_file)
        return None


@dataclass(frozen=True)
class Card:
    """
    A flashcard with its proficiency statistics.

    Content fields never change once a set is loaded. Statistics change only
    through the answer evaluator, which returns a new ``Card`` each time.
    """

    id: int
    question: str
    answer: str
    audio_ref: Optional[AudioRef] = None

    certainty: float = Config.DEFAULT_CERTAINTY
    time_to_answer: float = Config.DEFAULT_TIME_TO_ANSWER
    last_seen: int = Config.DEFAULT_LAST_SEEN

    @classmethod
    def from_entry(
        cls,
        card_id: int,
        entry: SetEntry,
        record: Optional[Dict[str, Any]] = None,
    ) -> "Card":
        """
        Build a card from a set entry and an optional stored record.

        Fields missing from ``record`` take the defaults.
        """
        record = record or {}
        certainty = record.get("certainty")
        time_to_answer = record.get("time_to_answer")
        last_seen = record.get("last_seen")
        return cls(
            id=card_id,
            question=entry.question,
            answer=entry.answer,
            audio_ref=entry.audio_ref,
            certainty=Config.DEFAULT_CERTAINTY if certainty is None else float(certainty),
            time_to_answer=(
                Config.DEFAULT_TIME_TO_ANSWER if time_to_answer is None else float(time_to_answer)
            ),
            last_seen=Config.DEFAULT_LAST_SEEN if last_seen is None else int(last_seen),
        )

    def with_stats(self, **changes: Any) -> "Card":
        """Return a copy with updated statistics."""
        return replace(self, **changes)

    def stats(self) -> Dict[str, Any]:
        """Statistics in the shape the proficiency store persists."""
        return {
            "certainty": self.certainty,
            "time_to_answer": self.time_to_answer,
            "last_seen": self.last_seen,
        }
