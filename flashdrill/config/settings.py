"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)

_BASE_DIR = Path(__file__).parent.parent.parent.resolve()
_DATA_DIR = Path(os.environ.get("FLASHDRILL_DATA_DIR", str(_BASE_DIR / "data")))


@dataclass
class Config:
    """Application-wide configuration."""

    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of flashdrill/)
    BASE_DIR: Path = _BASE_DIR
    DATA_DIR: str = str(_DATA_DIR)
    DB_PATH: str = os.environ.get("FLASHDRILL_DB_PATH", str(_DATA_DIR / "flashdrill.db"))
    SETS_DIR: str = os.environ.get("FLASHDRILL_SETS_DIR", str(_DATA_DIR / "sets"))
    AUDIO_DIR: str = os.environ.get("FLASHDRILL_AUDIO_DIR", str(_DATA_DIR / "audiobanks"))
    SETTINGS_FILE: str = str(_DATA_DIR / "settings.json")

    # Timers (seconds)
    RESPONSE_DEADLINE: float = 10.0
    FEEDBACK_HOLD: float = 1.0

    # Moving-average rates
    CORRECT_RATE: float = 0.2   # time_to_answer toward observed latency
    CERTAINTY_RATE: float = 0.2
    PEER_RATE: float = 0.1      # penalty for the card whose answer was given

    # Bounds and defaults for card statistics
    CERTAINTY_MIN: float = 0.0
    CERTAINTY_MAX: float = 100.0
    DEFAULT_CERTAINTY: float = 0.0
    DEFAULT_TIME_TO_ANSWER: float = 10.0
    DEFAULT_LAST_SEEN: int = 0

    # Recency window is len(set) / RECENCY_DIVISOR seconds
    RECENCY_DIVISOR: float = 3.0
