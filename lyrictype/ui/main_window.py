from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QStackedWidget

from lyrictype.api.client import LyricTypeClient
from lyrictype.config import Settings
from lyrictype.core.songs import Track
from lyrictype.ui.colors import Palette
from lyrictype.ui.game_view import GameView
from lyrictype.ui.leaderboard_view import LeaderboardView
from lyrictype.ui.search_view import SearchView


class MainWindow(QMainWindow):
    """Two-screen window: song search (home) and the typing game."""

    def __init__(self, client: LyricTypeClient, settings: Settings, song_id: Optional[str] = None) -> None:
        super().__init__()
        self._client = client
        self.setWindowTitle("Lyric Type")
        self.setStyleSheet(
            f"QMainWindow {{ background: qlineargradient(x1:0, y1:0, x2:0, y2:1,"
            f" stop:0 {Palette.BG_TOP}, stop:1 {Palette.BG_BOTTOM}); }}"
        )

        self._stack = QStackedWidget()
        self._search_view = SearchView(client, settings)
        self._game_view = GameView(client, settings)
        self._leaderboard_view = LeaderboardView()
        self._stack.addWidget(self._search_view)
        self._stack.addWidget(self._game_view)
        self._stack.addWidget(self._leaderboard_view)
        self.setCentralWidget(self._stack)

        self._search_view.song_selected.connect(self._open_track)
        self._game_view.back_requested.connect(self._show_home_screen)
        self._search_view.leaderboard_requested.connect(self._show_leaderboard)
        self._leaderboard_view.back_requested.connect(self._show_home_screen)

        if song_id:
            self._stack.setCurrentWidget(self._game_view)
            self._game_view.open_song(song_id)
        else:
            self._show_home_screen()

    def _open_track(self, track: Track) -> None:
        self._stack.setCurrentWidget(self._game_view)
        self._game_view.open_song(track.spotify_id, track)

    def _show_leaderboard(self) -> None:
        self._stack.setCurrentWidget(self._leaderboard_view)

    def _show_home_screen(self) -> None:
        self._stack.setCurrentWidget(self._search_view)
        self._search_view.refresh_stats()
        self._search_view.search_box.setFocus()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Tear down the running session and the HTTP client when closing the app."""
        self._game_view.close_session()
        self._client.close()
        super().closeEvent(event)
