"""
Card sound playback for the trainer view.

One sound plays at a time: starting a new one drops the previous audio
service from the page.
"""

import logging
import os
from typing import Any, Callable, Optional

import flet as ft
import flet_audio as fta

logger = logging.getLogger(__name__)


def _autoplay(src: str) -> fta.Audio:
    return fta.Audio(src=src, autoplay=True, volume=1.0, balance=0)


class AudioPlayer:
    """Plays resolved card audio through Flet's audio service."""

    def __init__(self, page: ft.Page, factory: Optional[Callable[[str], Any]] = None):
        """
        Args:
            page: Page whose services host the audio control
            factory: Builds the audio control for an absolute path
        """
        self.page = page
        self._factory = factory or _autoplay
        self._current: Optional[Any] = None

    @property
    def current(self) -> Optional[Any]:
        return self._current

    def play(self, path: Optional[str]) -> bool:
        """
        Start playing ``path``. Returns False when there is nothing to play
        or the control could not be created.
        """
        if not path:
            return False

        self.stop()
        try:
            # Flet resolves local sources from absolute paths only
            self._current = self._factory(os.path.abspath(path))
            self.page.services.append(self._current)
            self.page.update()
        except Exception as e:
            logger.warning("Could not play %s: %s", path, e)
            self.stop()
            return False

        logger.debug("Playing %s", path)
        return True

    def stop(self) -> None:
        if self._current is None:
            return
        if self._current in self.page.services:
            self.page.services.remove(self._current)
        self._current = None
