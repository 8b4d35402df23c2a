from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from lyrictype.api.client import LyricTypeClient
from lyrictype.config import Settings
from lyrictype.core.playback import PlaybackController
from lyrictype.core.reporter import CompletionReporter, SessionRecord
from lyrictype.core.session import GameSession, SessionPhase
from lyrictype.core.songs import Track
from lyrictype.ui.colors import Palette
from lyrictype.ui.rendering import render_lyrics_html
from lyrictype.ui.workers import LivenessToken, run_request

logger = logging.getLogger(__name__)


class GameView(QWidget):
    """Typing screen: lyrics, input box, play/pause, live stats and progress.

    Owns the :class:`GameSession` for the song on screen plus the two
    one-second timers (countdown and stats refresh). Every asynchronous
    reply is checked against the view's liveness token so results for a
    song the user already left are ignored.
    """

    back_requested = Signal()

    def __init__(self, client: LyricTypeClient, settings: Settings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._client = client
        self._settings = settings
        self._token = LivenessToken()
        self._session: Optional[GameSession] = None
        self._reporter: Optional[CompletionReporter] = None

        self._countdown_timer = QTimer(self)
        self._countdown_timer.setInterval(1000)
        self._countdown_timer.timeout.connect(self._on_countdown_tick)

        self._stats_timer = QTimer(self)
        self._stats_timer.setInterval(1000)
        self._stats_timer.timeout.connect(self._update_stats_panel)

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        header = QHBoxLayout()
        self._back_button = QPushButton("← Back")
        self._back_button.clicked.connect(self._on_back)
        header.addWidget(self._back_button)

        titles = QVBoxLayout()
        self._title_label = QLabel("")
        self._title_label.setStyleSheet(f"font-size:24px; font-weight:700; color:{Palette.TEXT_PRIMARY};")
        self._artist_label = QLabel("")
        self._artist_label.setStyleSheet(f"color:{Palette.TEXT_SECONDARY};")
        titles.addWidget(self._title_label)
        titles.addWidget(self._artist_label)
        header.addLayout(titles, 1)

        self._play_button = QPushButton("▶ Play")
        self._play_button.clicked.connect(self._on_toggle_play)
        header.addWidget(self._play_button)
        layout.addLayout(header)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        self._lyrics_view = QTextBrowser()
        self._lyrics_view.setMinimumHeight(260)
        self._lyrics_view.setOpenLinks(False)
        layout.addWidget(self._lyrics_view, 1)

        self.input_box = QLineEdit()
        self.input_box.setPlaceholderText("Type the lyrics...")
        self.input_box.setStyleSheet("font-size:20px; padding:12px;")
        self.input_box.textEdited.connect(self._on_text_edited)
        self.input_box.returnPressed.connect(self._on_commit)
        layout.addWidget(self.input_box)

        footer = QHBoxLayout()
        stats = QVBoxLayout()
        self._wpm_label = QLabel("WPM: 0")
        self._accuracy_label = QLabel("Accuracy: 100%")
        self._time_label = QLabel("")
        for lbl in (self._wpm_label, self._accuracy_label, self._time_label):
            lbl.setStyleSheet(f"color:{Palette.TEXT_SECONDARY};")
            stats.addWidget(lbl)
        footer.addLayout(stats, 1)

        self._notice_label = QLabel("")
        self._notice_label.setWordWrap(True)
        self._notice_label.setStyleSheet(f"color:{Palette.NOTICE};")
        footer.addWidget(self._notice_label, 2)

        self._reset_button = QPushButton("⟳ Restart")
        self._reset_button.clicked.connect(self._on_reset)
        footer.addWidget(self._reset_button)
        layout.addLayout(footer)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def open_song(self, spotify_id: str, track: Optional[Track] = None) -> None:
        """Start a fresh session for *spotify_id*, fetching lyrics if *track* lacks them."""
        self.close_session()
        self._token.advance()
        self._notice_label.setText("")
        self._title_label.setText(track.title if track else "Loading…")
        self._artist_label.setText(track.artist if track else "")

        reporter = CompletionReporter(
            recorder=self._record_async,
            user_id=self._settings.user_id,
            on_notice=self._show_notice,
            deferred=True,
        )
        self._reporter = reporter
        self._session = GameSession(
            spotify_id,
            playback=PlaybackController(),
            timer=self._countdown_timer,
            reporter=reporter,
            timed=self._settings.timed,
        )
        self._refresh()

        if track is not None and track.has_lyrics:
            self._apply_track(track)
            return
        run_request(
            lambda: self._client.get_song(spotify_id),
            self._on_song_loaded,
            self._on_song_failed,
            token=self._token,
        )

    def close_session(self) -> None:
        """Stop timers and release audio for the current song, if any."""
        self._stats_timer.stop()
        self._token.advance()
        if self._session is not None:
            self._session.teardown()
            self._session = None

    def _on_song_loaded(self, tracks: List[Track]) -> None:
        if self._session is None:
            return
        if not tracks:
            self._title_label.setText("Song not found")
            self._show_notice("We couldn't find that song. Go back and try another search.")
            return
        self._apply_track(tracks[0])

    def _on_song_failed(self, message: str) -> None:
        logger.warning("Loading song failed: %s", message)
        self._title_label.setText("Could not load song")
        self._show_notice("Could not load the lyrics. Check your connection and try again.")

    def _apply_track(self, track: Track) -> None:
        if self._session is None:
            return
        self._session.load(track.lyrics, track.title, track.artist, track.preview_url)
        self._title_label.setText(track.title)
        self._artist_label.setText(track.artist)
        if not track.preview_url:
            self._show_notice("No audio preview for this song; practising without sound.")
        if not self._session.lines:
            self._show_notice("This song has no lyrics to type.")
        self._refresh()

    def _record_async(self, record: SessionRecord) -> None:
        reporter = self._reporter
        run_request(
            lambda: self._client.record_session(record),
            lambda _: reporter.on_saved(record),
            lambda message: reporter.on_failed(record, message),
            token=self._token,
        )

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------

    def _on_toggle_play(self) -> None:
        if self._session is None:
            return
        if self._session.toggle_play() and self._session.phase is SessionPhase.PLAYING:
            self._stats_timer.start()
            self.input_box.setFocus()
        else:
            self._stats_timer.stop()
        self._refresh()

    def _on_text_edited(self, text: str) -> None:
        if self._session is None:
            return
        if self._session.on_keystroke(text):
            self._render_lyrics()

    def _on_commit(self) -> None:
        if self._session is None:
            return
        if self._session.on_commit():
            self.input_box.clear()
        self._refresh()

    def _on_countdown_tick(self) -> None:
        if self._session is None:
            return
        self._session.tick()
        self._refresh()

    def _on_reset(self) -> None:
        if self._session is None:
            return
        self._session.reset()
        self._stats_timer.stop()
        self.input_box.clear()
        self._notice_label.setText("")
        self._refresh()

    def _on_back(self) -> None:
        self.close_session()
        self.back_requested.emit()

    def _show_notice(self, message: str) -> None:
        self._notice_label.setText(message)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        session = self._session
        playing = session is not None and session.phase is SessionPhase.PLAYING
        self._play_button.setText("❚❚ Pause" if playing else "▶ Play")
        self._play_button.setEnabled(
            session is not None and session.phase in (SessionPhase.READY, SessionPhase.PLAYING) and bool(session.lines)
        )
        self.input_box.setEnabled(playing)
        self._reset_button.setEnabled(session is not None and session.phase is not SessionPhase.IDLE)
        self.progress_bar.setValue(int(round(session.progress)) if session else 0)
        if session is not None and session.is_complete():
            self._stats_timer.stop()
            self.input_box.clear()
        self._render_lyrics()
        self._update_stats_panel()

    def _render_lyrics(self) -> None:
        if self._session is None or self._session.phase is SessionPhase.IDLE:
            self._lyrics_view.setHtml("")
            return
        self._lyrics_view.setHtml(render_lyrics_html(self._session))
        self._scroll_to_active_line()

    def _scroll_to_active_line(self) -> None:
        if self._session is None:
            return
        block = self._lyrics_view.document().findBlockByNumber(self._session.current_line_index)
        if not block.isValid():
            return
        cursor = QTextCursor(block)
        self._lyrics_view.setTextCursor(cursor)
        self._lyrics_view.ensureCursorVisible()

    def _update_stats_panel(self) -> None:
        session = self._session
        if session is None:
            return
        if session.result is not None:
            result = session.result
            self._wpm_label.setText(f"Final WPM: {result.wpm}")
            self._accuracy_label.setText(f"Final accuracy: {result.accuracy}%")
        else:
            stats = session.current_stats()
            self._wpm_label.setText(f"WPM: {stats.wpm}")
            self._accuracy_label.setText(f"Accuracy: {stats.accuracy}%")
        if session.time_remaining is not None:
            m, s = divmod(session.time_remaining, 60)
            self._time_label.setText(f"Time left: {m}:{s:02d}")
        else:
            elapsed = session.result.elapsed_seconds if session.result else session.current_stats().elapsed_seconds
            m, s = divmod(elapsed, 60)
            self._time_label.setText(f"Time: {m}:{s:02d}")

    def closeEvent(self, event) -> None:
        """Release the session when the view is closed."""
        self._token.invalidate()
        if self._session is not None:
            self._session.teardown()
            self._session = None
        super().closeEvent(event)
