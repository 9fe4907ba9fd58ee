"""Configuration module for FlashDrill."""

from .settings import Config
from .config_manager import SettingsManager

__all__ = [
    'Config',
    'SettingsManager',
]
