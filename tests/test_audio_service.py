"""Tests for audio resolution."""

import pytest

from flashdrill.models import AudioRef
from flashdrill.services import AudioResolver


@pytest.fixture
def audio_dir(tmp_path):
    bank = tmp_path / "german"
    bank.mkdir()
    (bank / "haus.wav").write_bytes(b"RIFF")
    return tmp_path


def test_resolves_file_in_audiobank(audio_dir):
    resolver = AudioResolver(str(audio_dir))

    assert resolver.resolve("german", "haus.wav") == str(audio_dir / "german" / "haus.wav")
    assert resolver.resolve_ref(AudioRef("german", "haus.wav")) is not None


def test_unknown_file_is_unavailable(audio_dir):
    assert AudioResolver(str(audio_dir)).resolve("german", "katze.wav") is None


def test_unknown_bank_is_unavailable_and_cached(audio_dir):
    resolver = AudioResolver(str(audio_dir))

    assert resolver.resolve("french", "maison.wav") is None
    (audio_dir / "french").mkdir()
    (audio_dir / "french" / "maison.wav").write_bytes(b"RIFF")
    assert resolver.is_available("french") is False


def test_missing_reference_resolves_to_none(audio_dir):
    resolver = AudioResolver(str(audio_dir))

    assert resolver.resolve(None, "haus.wav") is None
    assert resolver.resolve("german", None) is None
    assert resolver.resolve_ref(None) is None
