from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class Track:
    """A song as returned by the lookup and search endpoints."""

    spotify_id: str
    title: str
    artist: str
    lyrics: str = ""
    preview_url: Optional[str] = None

    @property
    def has_lyrics(self) -> bool:
        return bool(split_lyrics(self.lyrics))

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Track":
        """Build a track from a JSON object (snake_case or camelCase keys)."""
        spotify_id = raw.get("spotify_id", raw.get("spotifyId"))
        title = raw.get("title")
        if not spotify_id or not title:
            raise ValueError(f"track payload missing id or title: {dict(raw)!r}")
        preview = raw.get("preview_url", raw.get("previewUrl")) or None
        return cls(
            spotify_id=str(spotify_id),
            title=str(title).strip(),
            artist=str(raw.get("artist") or "").strip(),
            lyrics=str(raw.get("lyrics") or ""),
            preview_url=str(preview) if preview else None,
        )


def split_lyrics(text: Optional[str]) -> List[str]:
    """Split raw newline-delimited lyrics into display lines, dropping blank ones."""
    if not text:
        return []
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]
