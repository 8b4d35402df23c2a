"""Tests for lyrictype.core.stats – per-user aggregates."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from lyrictype.core.stats import ProgressPoint, ProgressRecord, UserStats, aggregate_stats, parse_records

# A Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _rec(wpm: int, acc: float, days_ago: float) -> ProgressRecord:
    return ProgressRecord(wpm=wpm, accuracy=acc, completed_at=NOW - timedelta(days=days_ago))


class TestParseRecords:
    def test_sorted_oldest_first(self):
        rows = [
            {"wpm": 50, "accuracy": "90.5", "completed_at": "2024-05-14T10:00:00Z"},
            {"wpm": 40, "accuracy": 80, "completed_at": "2024-05-12T10:00:00+00:00"},
        ]
        records = parse_records(rows)
        assert [r.wpm for r in records] == [40, 50]
        assert records[1].accuracy == 90.5

    def test_naive_timestamp_treated_as_utc(self):
        records = parse_records([{"wpm": 1, "accuracy": 1, "completed_at": "2024-05-14T10:00:00"}])
        assert records[0].completed_at.tzinfo is timezone.utc

    def test_missing_field_raises(self):
        with pytest.raises(KeyError):
            parse_records([{"wpm": 1, "accuracy": 1}])


class TestAggregateStats:
    def test_no_records(self):
        stats = aggregate_stats([], now=NOW)
        assert stats == UserStats(average_wpm=0, average_accuracy=0.0, songs_completed=0, progress_data=[])

    def test_averages(self):
        stats = aggregate_stats([_rec(40, 90.0, 1), _rec(51, 95.25, 2)], now=NOW)
        assert stats.average_wpm == 46  # 45.5 rounds up
        assert stats.average_accuracy == pytest.approx(92.6)
        assert stats.songs_completed == 2

    def test_old_records_excluded_from_trend(self):
        stats = aggregate_stats([_rec(30, 90, 20), _rec(60, 90, 1)], now=NOW)
        assert stats.songs_completed == 2
        assert stats.progress_data == [ProgressPoint(date="Tue", wpm=60)]

    def test_same_day_averaged(self):
        records = parse_records(
            [
                {"wpm": 40, "accuracy": 90, "completed_at": "2024-05-14T09:00:00Z"},
                {"wpm": 51, "accuracy": 90, "completed_at": "2024-05-14T18:00:00Z"},
            ]
        )
        stats = aggregate_stats(records, now=NOW)
        assert stats.progress_data == [ProgressPoint(date="Tue", wpm=46)]

    def test_days_in_first_seen_order(self):
        records = [_rec(10, 90, 3), _rec(20, 90, 2), _rec(30, 90, 1)]
        stats = aggregate_stats(records, now=NOW)
        assert [p.date for p in stats.progress_data] == ["Sun", "Mon", "Tue"]

    def test_naive_now_treated_as_utc(self):
        naive_now = NOW.replace(tzinfo=None)
        stats = aggregate_stats([_rec(30, 90, 20), _rec(60, 90, 1)], now=naive_now)
        assert stats == aggregate_stats([_rec(30, 90, 20), _rec(60, 90, 1)], now=NOW)
        assert stats.progress_data == [ProgressPoint(date="Tue", wpm=60)]


class TestUserStatsFromPayload:
    def test_camel_case_payload(self):
        stats = UserStats.from_payload(
            {
                "averageWpm": 42,
                "averageAccuracy": 96.5,
                "songsCompleted": 3,
                "progressData": [{"date": "Mon", "wpm": 40}],
            }
        )
        assert stats.average_wpm == 42
        assert stats.average_accuracy == 96.5
        assert stats.songs_completed == 3
        assert stats.progress_data == [ProgressPoint("Mon", 40)]

    def test_empty_payload(self):
        assert UserStats.from_payload({}) == UserStats()
