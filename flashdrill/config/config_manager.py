"""User settings: a small JSON file plus FLASHDRILL_* environment overrides."""

import copy
import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from .settings import Config

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "on")


class SettingsManager:
    """
    Process-wide settings store.

    Precedence, lowest first: built-in defaults, the JSON file, then
    ``FLASHDRILL_<KEY>`` environment variables. Every value is coerced to
    the type of its default and unknown keys are dropped, so callers can
    rely on ``get`` returning the right type. Writes go straight to disk.

    The practice core never reads settings; the shell reads them at startup.

    Usage:
        settings = SettingsManager()
        session = SessionController(store, response_deadline=settings.response_deadline)
        settings.set("LAST_SET", "German::Articles")
    """

    _instance: Optional["SettingsManager"] = None
    _lock: Lock = Lock()

    ENV_PREFIX: str = "FLASHDRILL_"

    DEFAULTS: Dict[str, Any] = {
        # Restored on startup
        "LAST_SET": "",

        # Timer windows (seconds)
        "RESPONSE_DEADLINE": Config.RESPONSE_DEADLINE,
        "FEEDBACK_HOLD": Config.FEEDBACK_HOLD,

        "LOG_LEVEL": "INFO",
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    manager = super().__new__(cls)
                    manager._ready = False
                    cls._instance = manager
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Args:
            settings_file: JSON file to use (Config.SETTINGS_FILE by default).
                           Ignored once the singleton exists.
        """
        if self._ready:
            return

        self._path = Path(settings_file or Config.SETTINGS_FILE)
        self._values: Dict[str, Any] = {}
        self._write_lock = Lock()

        self._load()
        self._ready = True

    @property
    def settings_file(self) -> Path:
        return self._path

    @property
    def response_deadline(self) -> float:
        return self.get("RESPONSE_DEADLINE")

    @property
    def feedback_hold(self) -> float:
        return self.get("FEEDBACK_HOLD")

    # ==================== Loading ====================

    def _load(self) -> None:
        values = copy.deepcopy(self.DEFAULTS)

        for key, raw in self._read_file().items():
            if key in self.DEFAULTS:
                values[key] = self._coerce(key, raw)
            else:
                logger.debug("Ignoring unknown setting '%s' in %s", key, self._path)

        for key in self.DEFAULTS:
            raw = os.environ.get(self.ENV_PREFIX + key)
            if raw is not None:
                values[key] = self._coerce(key, raw)

        self._values = values
        self._write()

    def _read_file(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Settings file %s unreadable, using defaults: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object, using defaults", self._path)
            return {}
        return data

    def _coerce(self, key: str, raw: Any) -> Any:
        """Convert ``raw`` to the type of the key's default, or fall back to the default."""
        default = self.DEFAULTS[key]
        if isinstance(default, bool):
            if isinstance(raw, bool):
                return raw
            return str(raw).strip().lower() in _TRUE_WORDS
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw)
            except (TypeError, ValueError):
                logger.warning("Setting %s=%r is not a number, using %r", key, raw, default)
                return default
        return raw if isinstance(raw, str) else str(raw)

    def _write(self) -> None:
        with self._write_lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, "w", encoding="utf-8") as f:
                    json.dump(self._values, f, indent=2, ensure_ascii=False)
            except OSError as e:
                logger.warning("Could not write settings to %s: %s", self._path, e)

    # ==================== Access ====================

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._values.get(key, default))

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        """
        Change one setting.

        Raises:
            KeyError: for keys without a default
        """
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown setting '{key}'")
        self._values[key] = self._coerce(key, value)
        if persist:
            self._write()

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key, or every key when ``key`` is None, to its default."""
        if key is None:
            self._values = copy.deepcopy(self.DEFAULTS)
        elif key in self.DEFAULTS:
            self._values[key] = self.DEFAULTS[key]
        self._write()

    def reload(self) -> None:
        """Re-read the file and the environment."""
        self._load()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton so the next call builds a fresh one (tests)."""
        with cls._lock:
            cls._instance = None
