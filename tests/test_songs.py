"""Tests for lyrictype.core.songs – track payloads and lyric splitting."""

from __future__ import annotations

import pytest

from lyrictype.core.songs import Track, split_lyrics


# ---------------------------------------------------------------------------
# split_lyrics
# ---------------------------------------------------------------------------

class TestSplitLyrics:
    def test_simple(self):
        assert split_lyrics("one\ntwo") == ["one", "two"]

    def test_drops_blank_lines(self):
        assert split_lyrics("one\n\n\ntwo\n") == ["one", "two"]

    def test_whitespace_only_lines_dropped(self):
        assert split_lyrics("one\n   \t\ntwo") == ["one", "two"]

    def test_crlf(self):
        assert split_lyrics("one\r\ntwo\r\n") == ["one", "two"]

    def test_surrounding_whitespace_kept(self):
        assert split_lyrics("  one  \ntwo ") == ["  one  ", "two "]

    def test_only_newline_splits(self):
        assert split_lyrics("a\x0bb\nc\x0cd\ne\u2028f") == ["a\x0bb", "c\x0cd", "e\u2028f"]

    def test_inner_whitespace_kept(self):
        assert split_lyrics("a  b") == ["a  b"]

    def test_empty(self):
        assert split_lyrics("") == []

    def test_none(self):
        assert split_lyrics(None) == []


# ---------------------------------------------------------------------------
# Track.from_payload
# ---------------------------------------------------------------------------

class TestTrackFromPayload:
    def test_snake_case(self):
        t = Track.from_payload(
            {
                "spotify_id": "abc",
                "title": "Song",
                "artist": "Band",
                "lyrics": "la\nla",
                "preview_url": "https://p.example/x.mp3",
            }
        )
        assert t == Track("abc", "Song", "Band", "la\nla", "https://p.example/x.mp3")

    def test_camel_case(self):
        t = Track.from_payload({"spotifyId": "abc", "title": "Song", "artist": "Band", "previewUrl": "u"})
        assert t.spotify_id == "abc"
        assert t.preview_url == "u"

    def test_optional_fields_default(self):
        t = Track.from_payload({"spotify_id": "abc", "title": "Song"})
        assert t.artist == ""
        assert t.lyrics == ""
        assert t.preview_url is None

    def test_null_preview_is_none(self):
        t = Track.from_payload({"spotify_id": "abc", "title": "Song", "preview_url": None})
        assert t.preview_url is None

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            Track.from_payload({"title": "Song"})

    def test_missing_title_raises(self):
        with pytest.raises(ValueError):
            Track.from_payload({"spotify_id": "abc"})


class TestHasLyrics:
    def test_true(self):
        assert Track("a", "t", "x", lyrics="line").has_lyrics

    def test_blank_lyrics_false(self):
        assert not Track("a", "t", "x", lyrics="\n  \n").has_lyrics
