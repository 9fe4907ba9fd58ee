"""Services layer: storage, set sources and audio lookup."""

from .repository import InMemoryProficiencyStore, ProficiencyStore, SQLiteProficiencyStore
from .set_provider import (
    BaseSetProvider,
    CSVSetProvider,
    SetProviderRegistry,
    StaticSetProvider,
    build_entries,
)
from .audio_service import AudioResolver

__all__ = [
    "ProficiencyStore",
    "InMemoryProficiencyStore",
    "SQLiteProficiencyStore",
    "BaseSetProvider",
    "CSVSetProvider",
    "StaticSetProvider",
    "SetProviderRegistry",
    "build_entries",
    "AudioResolver",
]
