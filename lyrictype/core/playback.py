"""Looping audio preview tied to the play/pause state of a typing session."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

logger = logging.getLogger(__name__)


class _QtPreviewPlayer:
    """Thin adapter around ``QMediaPlayer`` + ``QAudioOutput``."""

    def __init__(self, url: str) -> None:
        self._output = QAudioOutput()
        self._output.setVolume(0.6)
        self._player = QMediaPlayer()
        self._player.setAudioOutput(self._output)
        self._player.setLoops(-1)  # QMediaPlayer.Loops.Infinite
        self._player.setSource(QUrl(url))

    def play(self) -> None:
        self._player.play()

    def pause(self) -> None:
        self._player.pause()

    def set_position(self, ms: int) -> None:
        self._player.setPosition(ms)

    def close(self) -> None:
        self._player.stop()
        self._player.setSource(QUrl())
        self._player.deleteLater()
        self._output.deleteLater()


PlayerFactory = Callable[[str], Any]


class PlaybackController:
    """Owns at most one preview player for the loaded session.

    A missing preview URL is not an error: every call becomes a no-op and
    ``has_audio`` reports False. Use as a context manager to guarantee the
    handle is released when the owning view goes away.
    """

    def __init__(self, player_factory: Optional[PlayerFactory] = None) -> None:
        self._factory: PlayerFactory = player_factory or _QtPreviewPlayer
        self._player: Optional[Any] = None
        self._playing = False

    @property
    def has_audio(self) -> bool:
        return self._player is not None

    @property
    def is_playing(self) -> bool:
        return self._playing

    def load(self, url: Optional[str]) -> bool:
        """Bind a new preview (releasing any previous one). Returns True if audio is available."""
        self.release()
        if not url:
            logger.info("No preview audio available; practising without sound")
            return False
        try:
            self._player = self._factory(url)
        except Exception as e:
            logger.warning("Could not create preview player for %s: %s", url, e)
            self._player = None
            return False
        return True

    def play(self) -> bool:
        """Start (or resume) looping playback. Returns False in silent mode."""
        if self._player is None:
            return False
        try:
            self._player.play()
        except Exception as e:
            logger.warning("Preview playback failed, continuing without audio: %s", e)
            self.release()
            return False
        self._playing = True
        return True

    def pause(self) -> None:
        if self._player is None:
            return
        self._player.pause()
        self._playing = False

    def rewind(self) -> None:
        """Pause and seek back to the start of the preview."""
        if self._player is None:
            return
        self.pause()
        self._player.set_position(0)

    def release(self) -> None:
        """Drop the player handle; safe to call repeatedly."""
        player, self._player = self._player, None
        self._playing = False
        if player is None:
            return
        try:
            player.close()
        except Exception as e:
            logger.warning("Error while releasing preview player: %s", e)

    def __enter__(self) -> "PlaybackController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
