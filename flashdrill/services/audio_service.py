"""
Audio Service - resolves card audio references to playable files.

An audiobank is a directory under Config.AUDIO_DIR; its content list is the
set of file names inside it. Resolution never raises: anything that cannot
be found is reported as unavailable (None) and playback is skipped.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from ..config import Config
from ..models import AudioRef

logger = logging.getLogger(__name__)


class AudioResolver:
    """Maps (audiobank, audio_file) pairs to file paths."""

    def __init__(self, audio_dir: Optional[str] = None):
        """
        Initialize audio resolver.

        Args:
            audio_dir: Directory holding audiobanks (Config.AUDIO_DIR by default)
        """
        self.audio_dir = Path(audio_dir or Config.AUDIO_DIR)
        # bank name -> {file name: path}, or None when the bank is unavailable
        self._banks: Dict[str, Optional[Dict[str, Path]]] = {}

    def load_audiobank(self, audiobank: str) -> Optional[Dict[str, Path]]:
        """Read and cache an audiobank's content list."""
        if audiobank in self._banks:
            return self._banks[audiobank]

        bank_dir = self.audio_dir / audiobank
        content: Optional[Dict[str, Path]] = None
        try:
            if bank_dir.is_dir():
                content = {
                    file.name: file
                    for file in bank_dir.iterdir()
                    if file.is_file()
                }
        except OSError as e:
            logger.debug("Audiobank '%s' unreadable: %s", audiobank, e)
            content = None

        if content is None:
            logger.debug("Audiobank '%s' not available", audiobank)
        self._banks[audiobank] = content
        return content

    def is_available(self, audiobank: str) -> bool:
        return self.load_audiobank(audiobank) is not None

    def resolve(self, audiobank: Optional[str], audio_file: Optional[str]) -> Optional[str]:
        """
        Playable path for a sound, or None if it is unavailable.
        """
        if not audiobank or not audio_file:
            return None
        content = self.load_audiobank(audiobank)
        if not content:
            return None
        path = content.get(audio_file)
        return str(path) if path is not None else None

    def resolve_ref(self, ref: Optional[AudioRef]) -> Optional[str]:
        if ref is None:
            return None
        return self.resolve(ref.audiobank, ref.audio_file)
