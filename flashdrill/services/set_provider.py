"""
Set Providers - where flashcard sets come from.

Providers are plain objects registered with a SetProviderRegistry; the
session controller receives one at activation time. Adding a new source
(another file format, a bundled package) means writing a BaseSetProvider
subclass and registering it.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from ..config import Config
from ..errors import SetLoadError
from ..models import SetEntry

logger = logging.getLogger(__name__)

RawEntry = Union[SetEntry, Mapping[str, Any]]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_entries(set_name: str, raw_entries: Iterable[RawEntry]) -> List[SetEntry]:
    """
    Validate raw provider data and turn it into SetEntry objects.

    Raises:
        SetLoadError: on a malformed entry or an empty set
    """
    entries: List[SetEntry] = []
    for index, raw in enumerate(raw_entries):
        if isinstance(raw, SetEntry):
            entry = raw
        elif isinstance(raw, Mapping):
            question = raw.get("question")
            answer = raw.get("answer")
            entry = SetEntry(
                question=question,
                answer=answer,
                audiobank=_optional_text(raw.get("audiobank")),
                audio_file=_optional_text(raw.get("audio_file")),
            )
        else:
            raise SetLoadError(f"Set '{set_name}': entry {index} is not a mapping")

        if not isinstance(entry.question, str) or not entry.question:
            raise SetLoadError(f"Set '{set_name}': entry {index} has no question")
        if not isinstance(entry.answer, str):
            raise SetLoadError(f"Set '{set_name}': entry {index} has no answer")
        entries.append(entry)

    if not entries:
        raise SetLoadError(f"Set '{set_name}' is empty")
    return entries


class BaseSetProvider(ABC):
    """
    Abstract source of flashcard sets.

    ``get_set`` must return the same ordered entries every time it is called
    for the same name within a session.
    """

    @abstractmethod
    def list_sets(self) -> List[str]:
        """Names of all sets this provider can load."""
        pass

    @abstractmethod
    def get_set(self, set_name: str) -> List[SetEntry]:
        """
        Load a set's entries in ordinal order.

        Raises:
            SetLoadError: if the set is unknown, malformed or empty
        """
        pass

    def has_set(self, set_name: str) -> bool:
        return set_name in self.list_sets()


class StaticSetProvider(BaseSetProvider):
    """Sets held in memory, e.g. bundled with the application or built in tests."""

    def __init__(self, sets: Optional[Mapping[str, Sequence[RawEntry]]] = None):
        self._sets: Dict[str, Sequence[RawEntry]] = dict(sets or {})

    def add_set(self, set_name: str, entries: Sequence[RawEntry]) -> None:
        self._sets[set_name] = entries

    def list_sets(self) -> List[str]:
        return sorted(self._sets)

    def get_set(self, set_name: str) -> List[SetEntry]:
        if set_name not in self._sets:
            raise SetLoadError(f"Unknown set '{set_name}'")
        return build_entries(set_name, self._sets[set_name])


class CSVSetProvider(BaseSetProvider):
    """
    Sets stored as pipe-separated CSV files.

    File ``German__Articles.csv`` holds set ``German::Articles``. Columns:
    ``question|answer`` plus optional ``audiobank|audio_file``.
    """

    REQUIRED_COLUMNS = ("question", "answer")
    NAMESPACE_SEP = "::"
    FILE_NAMESPACE_SEP = "__"

    def __init__(self, sets_dir: Optional[str] = None):
        """
        Initialize CSV provider.

        Args:
            sets_dir: Directory with set files (Config.SETS_DIR by default)
        """
        self.sets_dir = Path(sets_dir or Config.SETS_DIR)
        self._cache: Dict[str, List[SetEntry]] = {}

    def path_for(self, set_name: str) -> Path:
        stem = set_name.replace(self.NAMESPACE_SEP, self.FILE_NAMESPACE_SEP)
        return self.sets_dir / f"{stem}.csv"

    def list_sets(self) -> List[str]:
        if not self.sets_dir.is_dir():
            return []
        return sorted(
            file.stem.replace(self.FILE_NAMESPACE_SEP, self.NAMESPACE_SEP)
            for file in self.sets_dir.glob("*.csv")
            if not file.name.startswith("_")
        )

    def get_set(self, set_name: str) -> List[SetEntry]:
        if set_name in self._cache:
            return list(self._cache[set_name])

        csv_path = self.path_for(set_name)
        if not csv_path.exists():
            raise SetLoadError(f"Set file not found: {csv_path}")

        try:
            df = pd.read_csv(
                csv_path,
                sep='|',
                encoding='utf-8-sig',
                quoting=3,  # csv.QUOTE_NONE
                dtype=str,
                keep_default_na=False,
                engine='python'
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise SetLoadError(f"Could not read set '{set_name}': {e}") from e

        df.columns = df.columns.str.strip().str.lower()
        missing = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise SetLoadError(f"Set '{set_name}' is missing columns: {', '.join(missing)}")

        entries = build_entries(set_name, df.to_dict(orient="records"))
        self._cache[set_name] = entries
        logger.debug("Read %d entries from %s", len(entries), csv_path)
        return list(entries)


class SetProviderRegistry:
    """
    Registry of set providers.

    Sets are looked up by name across all registered providers; the first
    provider (in registration order) that knows a set wins.

    Usage:
        registry = SetProviderRegistry()
        registry.register(CSVSetProvider())
        provider = registry.provider_for("German::Articles")
    """

    def __init__(self, providers: Optional[Iterable[BaseSetProvider]] = None):
        self._providers: List[BaseSetProvider] = []
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: BaseSetProvider) -> None:
        """Register a provider."""
        if not isinstance(provider, BaseSetProvider):
            raise TypeError(f"Expected a BaseSetProvider, got {type(provider).__name__}")
        self._providers.append(provider)

    @property
    def providers(self) -> List[BaseSetProvider]:
        return list(self._providers)

    def list_sets(self) -> List[str]:
        """Sorted names of all sets from all providers."""
        names = set()
        for provider in self._providers:
            names.update(provider.list_sets())
        return sorted(names)

    def provider_for(self, set_name: str) -> BaseSetProvider:
        """
        Find the provider that owns a set.

        Raises:
            SetLoadError: if no provider knows the set
        """
        for provider in self._providers:
            if provider.has_set(set_name):
                return provider
        raise SetLoadError(f"No provider offers set '{set_name}'")
