"""Home screen: song search plus the signed-in user's stats summary."""

from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from lyrictype.api.client import LyricTypeClient
from lyrictype.config import Settings
from lyrictype.core.songs import Track
from lyrictype.core.stats import UserStats
from lyrictype.ui.colors import Palette
from lyrictype.ui.workers import LivenessToken, run_request

logger = logging.getLogger(__name__)


def format_stats(stats: UserStats) -> str:
    """One-paragraph summary of a user's history for the home screen."""
    text = (
        f"Average WPM: {stats.average_wpm}   "
        f"Average accuracy: {stats.average_accuracy:.1f}%   "
        f"Songs completed: {stats.songs_completed}"
    )
    if stats.progress_data:
        trend = ", ".join(f"{p.date} {p.wpm}" for p in stats.progress_data)
        text += f"\nLast 7 days: {trend}"
    return text


class SearchView(QWidget):
    song_selected = Signal(object)
    leaderboard_requested = Signal()

    def __init__(self, client: LyricTypeClient, settings: Settings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._client = client
        self._settings = settings
        self._token = LivenessToken()
        self._stats_token = LivenessToken()
        self._tracks: List[Track] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(48, 32, 48, 32)
        layout.setSpacing(16)

        title = QLabel("Lyric Type")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"font-size:36px; font-weight:800; color:{Palette.TEXT_PRIMARY};")
        subtitle = QLabel("Practice typing with your favorite songs")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet(f"color:{Palette.TEXT_SECONDARY};")
        layout.addWidget(title)
        layout.addWidget(subtitle)

        leaderboard_button = QPushButton("Leaderboard")
        leaderboard_button.clicked.connect(lambda: self.leaderboard_requested.emit())
        layout.addWidget(leaderboard_button, 0, Qt.AlignRight)

        row = QHBoxLayout()
        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search for a song...")
        self.search_box.returnPressed.connect(self._on_search)
        self._search_button = QPushButton("Search")
        self._search_button.clicked.connect(self._on_search)
        row.addWidget(self.search_box, 1)
        row.addWidget(self._search_button)
        layout.addLayout(row)

        self._status_label = QLabel("")
        self._status_label.setStyleSheet(f"color:{Palette.NOTICE};")
        layout.addWidget(self._status_label)

        self._results = QListWidget()
        self._results.itemActivated.connect(self._on_item_activated)
        layout.addWidget(self._results, 1)

        self._stats_label = QLabel("")
        self._stats_label.setWordWrap(True)
        self._stats_label.setStyleSheet(f"color:{Palette.TEXT_SECONDARY};")
        layout.addWidget(self._stats_label)

    def refresh_stats(self) -> None:
        """Fetch the signed-in user's aggregates; anonymous users see a hint instead."""
        user_id = self._settings.user_id
        if not user_id:
            self._stats_label.setText("Set LYRICTYPE_USER_ID to save your progress.")
            return
        self._stats_token.advance()
        run_request(
            lambda: self._client.get_user_stats(user_id),
            lambda stats: self._stats_label.setText(format_stats(stats)),
            lambda message: self._stats_label.setText("Stats are unavailable right now."),
            token=self._stats_token,
        )

    def _on_search(self) -> None:
        query = self.search_box.text().strip()
        if not query:
            return
        self._token.advance()
        self._search_button.setEnabled(False)
        self._status_label.setText("Searching…")
        run_request(
            lambda: self._client.search_songs(query),
            self._on_results,
            self._on_search_failed,
            token=self._token,
        )

    def _on_results(self, tracks: List[Track]) -> None:
        self._search_button.setEnabled(True)
        self._tracks = tracks
        self._results.clear()
        self._status_label.setText("" if tracks else "No songs found.")
        for track in tracks:
            item = QListWidgetItem(f"{track.title} — {track.artist}")
            item.setData(Qt.UserRole, track)
            self._results.addItem(item)

    def _on_search_failed(self, message: str) -> None:
        logger.warning("Search failed: %s", message)
        self._search_button.setEnabled(True)
        self._status_label.setText("Search failed. Please try again.")

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        track = item.data(Qt.UserRole)
        if isinstance(track, Track):
            self.song_selected.emit(track)
