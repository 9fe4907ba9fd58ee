import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flashdrill.models import Card
from flashdrill.services import InMemoryProficiencyStore, StaticSetProvider


class FakeClock:
    """Controllable Unix clock."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


ARTICLES = [
    {"question": "Haus", "answer": "das"},
    {"question": "Katze", "answer": "die"},
    {"question": "Hund", "answer": "der"},
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return InMemoryProficiencyStore()


@pytest.fixture
def provider():
    return StaticSetProvider({"German::Articles": ARTICLES})


def make_cards(*stats):
    """Cards from (certainty, time_to_answer, last_seen) tuples."""
    return [
        Card(
            id=index,
            question=f"q{index}",
            answer=f"a{index}",
            certainty=certainty,
            time_to_answer=time_to_answer,
            last_seen=last_seen,
        )
        for index, (certainty, time_to_answer, last_seen) in enumerate(stats)
    ]


@pytest.fixture
def cards_from():
    return make_cards
