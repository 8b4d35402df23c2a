"""Leaderboard rows and filtering for the leaderboard screen.

The backend has no global ranking endpoint yet, so the screen shows
:data:`SAMPLE_LEADERBOARD` as a preview.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    username: str
    wpm: int
    songs_completed: int


SAMPLE_LEADERBOARD: List[LeaderboardEntry] = [
    LeaderboardEntry(rank=1, username="speedtyper", wpm=120, songs_completed=150),
    LeaderboardEntry(rank=2, username="lyricmaster", wpm=115, songs_completed=130),
    LeaderboardEntry(rank=3, username="wordsmith", wpm=110, songs_completed=120),
]


def rank_entries(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Order by WPM, then songs completed, and renumber ranks from 1."""
    ordered = sorted(entries, key=lambda e: (-e.wpm, -e.songs_completed, e.username))
    return [
        LeaderboardEntry(rank=i, username=e.username, wpm=e.wpm, songs_completed=e.songs_completed)
        for i, e in enumerate(ordered, start=1)
    ]


def filter_entries(entries: Iterable[LeaderboardEntry], query: str) -> List[LeaderboardEntry]:
    """Case-insensitive username match. Ranks are kept, not renumbered."""
    needle = query.strip().casefold()
    if not needle:
        return list(entries)
    return [e for e in entries if needle in e.username.casefold()]
