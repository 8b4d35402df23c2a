from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol

from lyrictype.core.errors import SessionInvariantError
from lyrictype.core.metrics import accuracy, elapsed_minutes, words_per_minute
from lyrictype.core.playback import PlaybackController
from lyrictype.core.reporter import CompletionReporter
from lyrictype.core.songs import split_lyrics

logger = logging.getLogger(__name__)

COUNTDOWN_SECONDS = 60


class SessionPhase(Enum):
    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"
    COMPLETED = "completed"


class PlayStatus(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class LineState(Enum):
    COMPLETED = "completed"
    ACTIVE = "active"
    PENDING = "pending"


class CharState(Enum):
    NEUTRAL = "neutral"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class Ticker(Protocol):
    """Anything with start/stop, e.g. a one-second ``QTimer``."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


@dataclass(frozen=True)
class SongMetadata:
    title: str
    artist: str
    preview_url: Optional[str] = None


@dataclass(frozen=True)
class SessionStats:
    """Point-in-time speed/accuracy snapshot."""

    wpm: int
    accuracy: int
    elapsed_seconds: int


@dataclass(frozen=True)
class SessionResult:
    """Final metrics of a completed session."""

    song_id: str
    wpm: int
    accuracy: int
    typed_characters: int
    correct_characters: int
    lines_completed: int
    total_lines: int
    elapsed_seconds: int = 0


class GameSession:
    """State machine for typing one song's lyrics.

    Phases run ``IDLE -> READY -> PLAYING <-> READY -> COMPLETED``; only
    :meth:`reset` leaves ``COMPLETED``. A line is accepted only when the typed
    buffer equals it exactly, and its full length is then credited to both
    the typed and correct counters. Speed and accuracy are never stored; they
    are derived from the counters and the clock whenever asked for.

    With ``timed=True`` the session also counts down from
    ``COUNTDOWN_SECONDS``; the owner calls :meth:`tick` once per second
    (normally from the injected *timer*) and the session completes at zero.
    """

    def __init__(
        self,
        song_id: str = "",
        *,
        playback: Optional[PlaybackController] = None,
        timer: Optional[Ticker] = None,
        reporter: Optional[CompletionReporter] = None,
        timed: bool = False,
        duration: int = COUNTDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._song_id = song_id
        self._playback = playback
        self._timer = timer
        self._reporter = reporter
        self._timed = timed
        self._duration = duration
        self._clock = clock

        self._phase = SessionPhase.IDLE
        self._lines: List[str] = []
        self._metadata: Optional[SongMetadata] = None
        self._index = 0
        self._buffer = ""
        self._typed_chars = 0
        self._correct_chars = 0
        self._start_time: Optional[float] = None
        self._time_remaining: Optional[int] = duration if timed else None
        self._result: Optional[SessionResult] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def song_id(self) -> str:
        return self._song_id

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def play_status(self) -> PlayStatus:
        return PlayStatus.PLAYING if self._phase is SessionPhase.PLAYING else PlayStatus.STOPPED

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def metadata(self) -> Optional[SongMetadata]:
        return self._metadata

    @property
    def current_line_index(self) -> int:
        return self._index

    @property
    def typed_buffer(self) -> str:
        return self._buffer

    @property
    def typed_character_count(self) -> int:
        return self._typed_chars

    @property
    def correct_character_count(self) -> int:
        return self._correct_chars

    @property
    def start_time(self) -> Optional[float]:
        return self._start_time

    @property
    def time_remaining(self) -> Optional[int]:
        return self._time_remaining

    @property
    def timed(self) -> bool:
        return self._timed

    @property
    def result(self) -> Optional[SessionResult]:
        """Final metrics once the session has completed, else None."""
        return self._result

    @property
    def progress(self) -> float:
        """Completed lines as a percentage of all lines."""
        if not self._lines:
            return 0.0
        return self._index / len(self._lines) * 100

    def current_line(self) -> Optional[str]:
        """Text of the line being typed, or None once every line is done."""
        if self._index >= len(self._lines):
            return None
        return self._lines[self._index]

    def is_complete(self) -> bool:
        return self._phase is SessionPhase.COMPLETED

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def load(
        self,
        lyrics_text: Optional[str],
        title: str,
        artist: str,
        preview_url: Optional[str] = None,
    ) -> None:
        """Install a song's lyrics and metadata and move to ``READY``.

        Missing lyrics are not an error: the session becomes ``READY`` with no
        lines. Loading over an existing session discards its progress.
        """
        self._stop_activity()
        self._lines = split_lyrics(lyrics_text)
        self._metadata = SongMetadata(title=title, artist=artist, preview_url=preview_url or None)
        self._clear_progress()
        self._phase = SessionPhase.READY
        if self._playback is not None:
            self._playback.load(preview_url)
        if not self._lines:
            logger.info("Song %r has no lyrics; nothing to type", title)
        logger.info("Loaded %r by %s: %d lines", title, artist, len(self._lines))

    def toggle_play(self) -> bool:
        """Start or pause the session. Returns True if the phase changed."""
        if self._phase is SessionPhase.PLAYING:
            self._phase = SessionPhase.READY
            if self._playback is not None:
                self._playback.pause()
            if self._timer is not None:
                self._timer.stop()
            return True

        if self._phase is not SessionPhase.READY:
            return False
        if not self._lines:
            logger.info("Refusing to start a session with no lyric lines")
            return False
        if self._timed and not self._time_remaining:
            return False

        self._phase = SessionPhase.PLAYING
        if self._start_time is None:
            self._start_time = self._clock()
        if self._playback is not None:
            self._playback.play()
        if self._timer is not None:
            self._timer.start()
        return True

    def on_keystroke(self, buffer: str) -> bool:
        """Replace the in-progress input for the current line (ignored unless playing)."""
        if self._phase is not SessionPhase.PLAYING:
            return False
        self._buffer = buffer
        return True

    def on_commit(self) -> bool:
        """Submit the buffer for the current line. Returns True if the line was accepted."""
        if self._phase is not SessionPhase.PLAYING:
            return False
        target = self._lines[self._index]
        if self._buffer != target:
            return False

        self._typed_chars += len(self._buffer)
        self._correct_chars += len(self._buffer)
        self._index += 1
        self._buffer = ""
        self._check_invariants()

        if self._index == len(self._lines):
            self.complete()
        return True

    def tick(self) -> None:
        """Advance the countdown by one second (timed sessions only)."""
        if not self._timed or self._phase is not SessionPhase.PLAYING:
            return
        self._time_remaining = max(0, (self._time_remaining or 0) - 1)
        if self._time_remaining == 0:
            logger.info("Time is up for song %s", self._song_id)
            self.complete()

    def complete(self) -> Optional[SessionResult]:
        """Finish the session and report it once; later calls return the same result."""
        if self._phase is SessionPhase.COMPLETED:
            return self._result
        if self._phase is SessionPhase.IDLE:
            return None

        self._phase = SessionPhase.COMPLETED
        self._stop_activity()

        stats = self.current_stats()
        self._result = SessionResult(
            song_id=self._song_id,
            wpm=stats.wpm,
            accuracy=stats.accuracy,
            typed_characters=self._typed_chars,
            correct_characters=self._correct_chars,
            lines_completed=self._index,
            total_lines=len(self._lines),
            elapsed_seconds=stats.elapsed_seconds,
        )
        logger.info(
            "Session complete: song=%s wpm=%d accuracy=%d%% lines=%d/%d",
            self._song_id,
            stats.wpm,
            stats.accuracy,
            self._index,
            len(self._lines),
        )
        if self._reporter is not None:
            self._reporter.report(self._song_id, stats.wpm, stats.accuracy)
        return self._result

    def reset(self) -> None:
        """Return to ``READY`` with fresh counters, rewinding the preview."""
        if self._timer is not None:
            self._timer.stop()
        if self._playback is not None:
            self._playback.rewind()
        self._clear_progress()
        self._phase = SessionPhase.READY if self._metadata is not None else SessionPhase.IDLE

    def teardown(self) -> None:
        """Release the timer and audio when the owning view goes away."""
        if self._timer is not None:
            self._timer.stop()
        if self._playback is not None:
            self._playback.release()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def current_stats(self, now: Optional[float] = None) -> SessionStats:
        """Speed and accuracy from the live counters and the clock."""
        acc = accuracy(self._correct_chars, self._typed_chars)
        if self._start_time is None:
            return SessionStats(wpm=0, accuracy=acc, elapsed_seconds=0)
        if now is None:
            now = self._clock()
        minutes = elapsed_minutes(self._start_time, now)
        wpm = words_per_minute(self._typed_chars, minutes) if minutes > 0 else 0
        return SessionStats(wpm=wpm, accuracy=acc, elapsed_seconds=int(minutes * 60))

    def line_states(self) -> List[LineState]:
        states = []
        for i in range(len(self._lines)):
            if i < self._index:
                states.append(LineState.COMPLETED)
            elif i == self._index:
                states.append(LineState.ACTIVE)
            else:
                states.append(LineState.PENDING)
        return states

    def char_feedback(self) -> List[CharState]:
        """Per-character colouring of the active line against the typed buffer."""
        line = self.current_line()
        if line is None:
            return []
        feedback = []
        for i, expected in enumerate(line):
            if i >= len(self._buffer):
                feedback.append(CharState.NEUTRAL)
            elif self._buffer[i] == expected:
                feedback.append(CharState.CORRECT)
            else:
                feedback.append(CharState.INCORRECT)
        return feedback

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _stop_activity(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        if self._playback is not None:
            self._playback.pause()

    def _clear_progress(self) -> None:
        self._index = 0
        self._buffer = ""
        self._typed_chars = 0
        self._correct_chars = 0
        self._start_time = None
        self._time_remaining = self._duration if self._timed else None
        self._result = None

    def _check_invariants(self) -> None:
        if not 0 <= self._index <= len(self._lines):
            raise SessionInvariantError(f"line index {self._index} outside 0..{len(self._lines)}")
        if not self._typed_chars >= self._correct_chars >= 0:
            raise SessionInvariantError(
                f"character counts out of order: typed={self._typed_chars} correct={self._correct_chars}"
            )
