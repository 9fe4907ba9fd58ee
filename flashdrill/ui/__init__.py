"""UI components for FlashDrill."""

from .audio_player import AudioPlayer
from .timers import QuestionTimers
from .trainer import TrainerView, set_options

__all__ = [
    'AudioPlayer',
    'QuestionTimers',
    'TrainerView',
    'set_options',
]
