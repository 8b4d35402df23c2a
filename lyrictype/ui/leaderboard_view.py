"""Leaderboard screen: ranked players with a username filter."""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from lyrictype.core.leaderboard import SAMPLE_LEADERBOARD, LeaderboardEntry, filter_entries, rank_entries
from lyrictype.ui.colors import Palette

COLUMNS = ("Rank", "Username", "Average WPM", "Songs Completed")


class LeaderboardView(QWidget):
    back_requested = Signal()

    def __init__(self, entries: Optional[List[LeaderboardEntry]] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._entries = rank_entries(SAMPLE_LEADERBOARD if entries is None else entries)
        self._build_ui()
        self._populate(self._entries)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(48, 32, 48, 32)
        layout.setSpacing(16)

        header = QHBoxLayout()
        back = QPushButton("← Back")
        back.clicked.connect(lambda: self.back_requested.emit())
        header.addWidget(back)
        title = QLabel("Global Leaderboard")
        title.setStyleSheet(f"font-size:32px; font-weight:800; color:{Palette.TEXT_PRIMARY};")
        header.addWidget(title, 1)
        self.filter_box = QLineEdit()
        self.filter_box.setPlaceholderText("Search players...")
        self.filter_box.textChanged.connect(self._on_filter)
        header.addWidget(self.filter_box)
        layout.addLayout(header)

        note = QLabel("Sample rankings. Live global rankings are not available yet.")
        note.setStyleSheet(f"color:{Palette.TEXT_SECONDARY};")
        layout.addWidget(note)

        self._table = QTableWidget(0, len(COLUMNS))
        self._table.setHorizontalHeaderLabels(COLUMNS)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self._table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self._table.setSelectionMode(QAbstractItemView.NoSelection)
        layout.addWidget(self._table, 1)

    def _populate(self, entries: List[LeaderboardEntry]) -> None:
        self._table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            values = (entry.rank, entry.username, entry.wpm, entry.songs_completed)
            for col, value in enumerate(values):
                item = QTableWidgetItem(str(value))
                if col != 1:
                    item.setTextAlignment(Qt.AlignCenter)
                self._table.setItem(row, col, item)

    def _on_filter(self, text: str) -> None:
        self._populate(filter_entries(self._entries, text))
