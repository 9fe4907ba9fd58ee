"""Tests for answer evaluation."""

import pytest

from flashdrill.core.evaluator import AnswerEvaluator
from flashdrill.models import Card, Outcome

NOW = 1_700_000_000.75


@pytest.fixture
def evaluator():
    return AnswerEvaluator()


def card(card_id=0, answer="das", certainty=0.0, time_to_answer=10.0, last_seen=0):
    return Card(
        id=card_id,
        question=f"q{card_id}",
        answer=answer,
        certainty=certainty,
        time_to_answer=time_to_answer,
        last_seen=last_seen,
    )


def test_correct_answer_moves_time_and_certainty(evaluator):
    current = card(certainty=50, time_to_answer=10)

    result = evaluator.evaluate(current, "das", 5.0, [current], NOW)

    assert result.outcome is Outcome.CORRECT
    assert result.card.time_to_answer == pytest.approx(9.0)
    assert result.card.certainty == pytest.approx(60.0)
    assert result.card.last_seen == 1_700_000_000
    assert result.peer is None


def test_incorrect_answer_lowers_certainty_only(evaluator):
    current = card(certainty=60, time_to_answer=7.5)

    result = evaluator.evaluate(current, "der", 3.0, [current], NOW)

    assert result.outcome is Outcome.INCORRECT
    assert result.card.certainty == pytest.approx(48.0)
    assert result.card.time_to_answer == 7.5
    assert result.card.last_seen == 1_700_000_000


def test_comparison_is_exact(evaluator):
    current = card(answer="das")

    assert evaluator.evaluate(current, "Das", 1.0, [current], NOW).outcome is Outcome.INCORRECT
    assert evaluator.evaluate(current, "das ", 1.0, [current], NOW).outcome is Outcome.INCORRECT


def test_evaluation_does_not_mutate_input(evaluator):
    current = card(certainty=50)

    evaluator.evaluate(current, "das", 2.0, [current], NOW)

    assert current.certainty == 50
    assert current.last_seen == 0


def test_peer_card_is_penalised_without_touching_last_seen(evaluator):
    current = card(0, answer="das", certainty=60)
    peer = card(1, answer="die", certainty=50, last_seen=123)
    cards = [current, peer]

    result = evaluator.evaluate(current, "die", 4.0, cards, NOW)

    assert result.peer is not None
    assert result.peer.id == 1
    assert result.peer.certainty == pytest.approx(45.0)
    assert result.peer.last_seen == 123
    assert result.peer.time_to_answer == peer.time_to_answer


def test_only_first_matching_peer_is_penalised(evaluator):
    cards = [
        card(0, answer="das", certainty=60),
        card(1, answer="der", certainty=80),
        card(2, answer="die", certainty=40),
        card(3, answer="die", certainty=40),
    ]

    result = evaluator.evaluate(cards[0], "die", 4.0, cards, NOW)

    assert result.peer.id == 2


def test_no_peer_for_unrelated_wrong_answer(evaluator):
    cards = [card(0, answer="das"), card(1, answer="die")]

    assert evaluator.evaluate(cards[0], "xyz", 1.0, cards, NOW).peer is None


def test_current_card_is_never_its_own_peer(evaluator):
    cards = [card(0, answer="das"), card(1, answer="die")]

    result = evaluator.evaluate(cards[0], "das", 1.0, cards, NOW)

    assert result.peer is None


def test_bounds_hold_for_out_of_range_input(evaluator):
    wild = card(certainty=250, time_to_answer=-4)

    correct = evaluator.evaluate(wild, "das", -3.0, [wild], NOW)
    incorrect = evaluator.evaluate(card(certainty=-20), "nope", 1.0, [wild], NOW)

    assert 0 <= correct.card.certainty <= 100
    assert correct.card.time_to_answer >= 0
    assert 0 <= incorrect.card.certainty <= 100


def test_repeated_correct_answers_converge_without_overshoot(evaluator):
    current = card(certainty=0, time_to_answer=10)
    previous = current

    for _ in range(40):
        current = evaluator.evaluate(current, "das", 4.0, [current], NOW).card
        assert previous.certainty < current.certainty <= 100
        assert 4.0 <= current.time_to_answer < previous.time_to_answer
        previous = current

    assert current.certainty == pytest.approx(100, abs=0.1)
    assert current.time_to_answer == pytest.approx(4.0, abs=0.01)


def test_repeated_incorrect_answers_converge_to_zero(evaluator):
    current = card(certainty=100, time_to_answer=6)

    for _ in range(40):
        updated = evaluator.evaluate(current, "", 10.0, [current], NOW).card
        assert 0 <= updated.certainty < current.certainty
        assert updated.time_to_answer == 6
        current = updated

    assert current.certainty == pytest.approx(0, abs=0.1)
