"""Tests for the practice session state machine."""

import pytest

from flashdrill.core.session import SessionController
from flashdrill.errors import EmptySetError, PersistenceError, SchedulerExhausted, SetLoadError
from flashdrill.models import Outcome, SessionState
from flashdrill.services import (
    AudioResolver,
    InMemoryProficiencyStore,
    SetProviderRegistry,
    StaticSetProvider,
)


class FailingStore(InMemoryProficiencyStore):
    """Store whose reads raise and whose writes fail."""

    def load_all(self, set_key):
        raise PersistenceError("disk on fire")

    def save(self, set_key, card_id, certainty, time_to_answer, last_seen):
        return False


@pytest.fixture
def session(store, provider, clock, rng):
    return SessionController(store, provider, clock=clock, rng=rng)


def answer_of(session, card_id):
    return session.cards[card_id].answer


def test_activate_uses_defaults_without_history(session):
    snapshot = session.activate("German::Articles")

    assert snapshot.state is SessionState.IDLE
    assert snapshot.can_advance
    assert snapshot.certainties == [0.0, 0.0, 0.0]
    assert [c.time_to_answer for c in session.cards] == [10.0, 10.0, 10.0]
    assert [c.last_seen for c in session.cards] == [0, 0, 0]
    assert [c.id for c in session.cards] == [0, 1, 2]


def test_activate_restores_stored_statistics(session, store):
    store.save("German::Articles", 1, 70.0, 4.0, 500)

    session.activate("German::Articles")

    assert session.cards[1].certainty == 70.0
    assert session.cards[1].time_to_answer == 4.0
    assert session.cards[1].last_seen == 500
    assert session.cards[0].certainty == 0.0


def test_failed_activation_keeps_previous_set(session, provider):
    provider.add_set("Empty", [])
    session.activate("German::Articles")

    with pytest.raises(SetLoadError):
        session.activate("Empty")

    assert session.set_name == "German::Articles"
    assert len(session.cards) == 3


def test_activate_through_registry(store, provider, clock):
    registry = SetProviderRegistry([provider])
    session = SessionController(store, registry, clock=clock)

    session.activate("German::Articles")

    with pytest.raises(SetLoadError):
        session.activate("Unknown")


def test_activate_with_explicit_provider(store, clock):
    session = SessionController(store, clock=clock)
    colors = StaticSetProvider({"Colors": [{"question": "rot", "answer": "red"}]})

    session.activate("Colors", provider=colors)

    assert session.cards[0].question == "rot"


def test_start_next_awaits_answer_and_arms_deadline(session):
    session.activate("German::Articles")

    snapshot = session.start_next()

    assert snapshot.state is SessionState.AWAITING_ANSWER
    assert snapshot.deadline_seconds == 10.0
    assert snapshot.question in {"Haus", "Katze", "Hund"}
    assert session.current is not None
    assert not snapshot.can_advance


def test_start_next_without_set_raises(session):
    with pytest.raises(SchedulerExhausted):
        session.start_next()


def test_correct_submission_updates_and_persists(session, store, clock):
    session.activate("German::Articles")
    card_id = session.start_next().card_id
    clock.advance(5.0)

    snapshot = session.submit_answer(answer_of(session, card_id))

    assert snapshot.outcome is Outcome.CORRECT
    assert snapshot.state is SessionState.IDLE
    assert snapshot.answer_time == 5.0
    assert snapshot.cancel_deadline
    assert snapshot.can_advance
    assert snapshot.feedback_hold_seconds is None
    assert snapshot.persisted
    assert session.current is None

    updated = session.cards[card_id]
    assert updated.certainty == pytest.approx(20.0)
    assert updated.time_to_answer == pytest.approx(9.0)
    assert updated.last_seen == int(clock.now)
    assert store.load_all("German::Articles")[card_id] == updated.stats()


def test_incorrect_submission_reveals_answer_and_holds(session):
    session.activate("German::Articles")
    card_id = session.start_next().card_id

    snapshot = session.submit_answer("falsch")

    assert snapshot.outcome is Outcome.INCORRECT
    assert snapshot.reveal_answer
    assert snapshot.answer == answer_of(session, card_id)
    assert snapshot.feedback_hold_seconds == 1.0
    assert not snapshot.can_advance
    assert session.cards[card_id].time_to_answer == 10.0


def test_deadline_evaluates_pending_text_as_incorrect(session, clock):
    session.activate("German::Articles")
    card_id = session.start_next().card_id
    clock.advance(10.0)

    snapshot = session.on_deadline_elapsed()

    assert snapshot.outcome is Outcome.INCORRECT
    assert session.cards[card_id].last_seen == int(clock.now)


def test_deadline_with_correct_pending_text(session):
    session.activate("German::Articles")
    card_id = session.start_next().card_id

    snapshot = session.on_deadline_elapsed(answer_of(session, card_id))

    assert snapshot.outcome is Outcome.CORRECT


def test_only_first_event_is_evaluated(session, store):
    saves = []
    original_save = store.save

    def counting_save(*args):
        saves.append(args)
        return original_save(*args)

    store.save = counting_save
    session.activate("German::Articles")
    card_id = session.start_next().card_id

    assert session.submit_answer(answer_of(session, card_id)) is not None
    assert session.on_deadline_elapsed() is None
    assert session.submit_answer("again") is None
    assert len(saves) == 1


def test_start_next_while_awaiting_keeps_current_card(session):
    session.activate("German::Articles")
    first = session.start_next()

    again = session.start_next()

    assert again.card_id == first.card_id
    assert again.deadline_seconds is None


def test_peer_penalty_is_persisted_separately(store, clock, rng):
    provider = StaticSetProvider({"Pairs": [
        {"question": "Haus", "answer": "das"},
        {"question": "Katze", "answer": "die"},
    ]})
    store.save("Pairs", 0, 0.0, 10.0, 0)
    store.save("Pairs", 1, 50.0, 10.0, 42)
    session = SessionController(store, provider, clock=clock, rng=rng)
    session.activate("Pairs")

    # card 0 has the unique lowest certainty
    assert session.start_next().card_id == 0
    session.submit_answer("die")

    records = store.load_all("Pairs")
    assert records[1]["certainty"] == pytest.approx(45.0)
    assert records[1]["last_seen"] == 42
    assert session.cards[1].certainty == pytest.approx(45.0)


def test_save_failure_is_not_fatal(provider, clock, rng):
    session = SessionController(FailingStore(), provider, clock=clock, rng=rng)

    session.activate("German::Articles")
    card_id = session.start_next().card_id
    snapshot = session.submit_answer(answer_of(session, card_id))

    assert snapshot.persisted is False
    assert session.cards[card_id].certainty == pytest.approx(20.0)


def test_recently_answered_card_is_not_repeated(session, clock):
    session.activate("German::Articles")
    first = session.start_next().card_id
    session.submit_answer("wrong")

    # 3 cards -> 1 second window; the wrongly answered card is weakest but recent
    second = session.start_next().card_id
    assert second != first
    session.submit_answer(answer_of(session, second))

    third = session.start_next().card_id
    assert third not in {first, second}
    session.submit_answer(answer_of(session, third))

    # everything is recent now, so the whole set is eligible again
    assert session.start_next().card_id == first

    session.submit_answer("wrong")
    clock.advance(2.0)
    assert session.start_next().card_id == first


def test_aggregate_stats(session):
    with pytest.raises(EmptySetError):
        session.aggregate_stats()

    session.activate("German::Articles")
    summary = session.aggregate_stats()

    assert summary.mean_certainty == 0.0
    assert summary.mean_time_to_answer == 10.0
    assert summary.card_count == 3


def test_snapshot_carries_status_and_summary(session):
    snapshot = session.activate("German::Articles")

    assert snapshot.status_lines[0] == "Haus: 0 %, 10.0 s"
    assert snapshot.summary == "German -> Articles\nCertainty = 0.0 Answer Time = 10.0"


def test_audio_path_is_reported_after_evaluation(store, clock, rng, tmp_path):
    bank = tmp_path / "german"
    bank.mkdir()
    (bank / "haus.wav").write_bytes(b"RIFF")
    provider = StaticSetProvider({"Sounds": [
        {"question": "Haus", "answer": "das", "audiobank": "german", "audio_file": "haus.wav"},
    ]})
    session = SessionController(
        store, provider, audio=AudioResolver(str(tmp_path)), clock=clock, rng=rng,
    )
    session.activate("Sounds")

    assert session.start_next().audio_path is None
    snapshot = session.submit_answer("das")

    assert snapshot.audio_path == str(bank / "haus.wav")


def test_close_drops_current_card(session):
    session.activate("German::Articles")
    session.start_next()

    session.close()

    assert session.state is SessionState.IDLE
    assert session.on_deadline_elapsed() is None
