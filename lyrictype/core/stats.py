"""Per-user aggregates over completed-session records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from lyrictype.core.metrics import round_half_up

PROGRESS_WINDOW_DAYS = 7


@dataclass(frozen=True)
class ProgressPoint:
    date: str
    wpm: int


@dataclass(frozen=True)
class UserStats:
    average_wpm: int = 0
    average_accuracy: float = 0.0
    songs_completed: int = 0
    progress_data: List[ProgressPoint] = field(default_factory=list)

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "UserStats":
        points = [
            ProgressPoint(date=str(p.get("date", "")), wpm=int(p.get("wpm", 0)))
            for p in raw.get("progressData", []) or []
        ]
        return cls(
            average_wpm=int(raw.get("averageWpm", 0)),
            average_accuracy=float(raw.get("averageAccuracy", 0.0)),
            songs_completed=int(raw.get("songsCompleted", 0)),
            progress_data=points,
        )


@dataclass(frozen=True)
class ProgressRecord:
    wpm: int
    accuracy: float
    completed_at: datetime


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        ts = value
    else:
        ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def parse_records(rows: Iterable[Mapping[str, Any]]) -> List[ProgressRecord]:
    """Convert ``user_progress`` rows into records, oldest first."""
    records = [
        ProgressRecord(
            wpm=int(row["wpm"]),
            accuracy=float(row["accuracy"]),
            completed_at=_parse_timestamp(row["completed_at"]),
        )
        for row in rows
    ]
    records.sort(key=lambda r: r.completed_at)
    return records


def aggregate_stats(records: List[ProgressRecord], now: Optional[datetime] = None) -> UserStats:
    """Average speed and accuracy over all records plus a 7-day WPM trend.

    The trend groups records by short weekday name ("Mon", "Tue", ...) and
    keeps each day's running average WPM, in order of first appearance.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    count = len(records)
    divisor = count or 1
    average_wpm = sum(r.wpm for r in records) / divisor
    average_accuracy = sum(r.accuracy for r in records) / divisor

    per_day: Dict[str, List[float]] = {}
    for record in records:
        diff_days = math.ceil(abs((now - record.completed_at).total_seconds()) / 86400)
        if diff_days > PROGRESS_WINDOW_DAYS:
            continue
        day = record.completed_at.strftime("%a")
        if day not in per_day:
            per_day[day] = [float(record.wpm), 1]
        else:
            avg, n = per_day[day]
            per_day[day] = [(avg * n + record.wpm) / (n + 1), n + 1]

    return UserStats(
        average_wpm=round_half_up(average_wpm),
        average_accuracy=round_half_up(average_accuracy * 10) / 10,
        songs_completed=count,
        progress_data=[ProgressPoint(date=day, wpm=round_half_up(avg)) for day, (avg, _) in per_day.items()],
    )
