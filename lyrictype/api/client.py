"""HTTP client for the song search, lyrics and progress backend.

The backend is a Supabase project: edge functions under ``/functions/v1``
and PostgREST tables under ``/rest/v1``. Every failure (transport error,
non-2xx status, unparsable body) surfaces as :class:`ApiError` so callers
have a single thing to catch.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional

import httpx

from lyrictype.config import Settings
from lyrictype.core.errors import ApiError
from lyrictype.core.reporter import SessionRecord
from lyrictype.core.songs import Track
from lyrictype.core.stats import UserStats, aggregate_stats, parse_records

logger = logging.getLogger(__name__)

SEARCH_FUNCTION = "/functions/v1/search-songs"
SONGS_TABLE = "/rest/v1/songs"
PROGRESS_TABLE = "/rest/v1/user_progress"


class LyricTypeClient:
    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LyricTypeClient":
        return cls(settings.api_url, settings.api_key, timeout=settings.request_timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LyricTypeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------

    def search_songs(self, query: str) -> List[Track]:
        """Free-text search; lyrics may be empty in the results."""
        query = query.strip()
        if not query:
            return []
        payload = self._request("POST", SEARCH_FUNCTION, json={"query": query})
        if isinstance(payload, dict):
            message = str(payload.get("error", ""))
            if message == "No tracks found":
                return []
            raise ApiError(f"search failed: {message or payload!r}")
        return self._parse_tracks(payload)

    def get_song(self, spotify_id: str) -> List[Track]:
        """Look up one song (with lyrics) by its Spotify id. Empty list if unknown."""
        payload = self._request(
            "GET",
            SONGS_TABLE,
            params={"select": "*", "spotify_id": f"eq.{spotify_id}"},
        )
        return self._parse_tracks(payload)

    def record_session(self, record: SessionRecord) -> None:
        """Append one completed-session row to ``user_progress``."""
        self._request(
            "POST",
            PROGRESS_TABLE,
            json={
                "user_id": record.user_id,
                "song_id": record.song_id,
                "wpm": record.wpm,
                "accuracy": record.accuracy,
            },
            headers={"Prefer": "return=minimal"},
        )

    def get_user_stats(self, user_id: str, now: Optional[datetime] = None) -> UserStats:
        rows = self._request(
            "GET",
            PROGRESS_TABLE,
            params={
                "select": "wpm,accuracy,completed_at",
                "user_id": f"eq.{user_id}",
                "order": "completed_at.asc",
            },
        )
        if not isinstance(rows, list):
            raise ApiError(f"unexpected stats payload: {rows!r}")
        try:
            records = parse_records(rows)
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"malformed progress rows: {e}") from e
        return aggregate_stats(records, now=now)

    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("%s %s returned %s", method, path, e.response.status_code)
            raise ApiError(
                f"{method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _parse_tracks(payload: Any) -> List[Track]:
        if not isinstance(payload, list):
            raise ApiError(f"expected a list of tracks, got {type(payload).__name__}")
        tracks = []
        for raw in payload:
            try:
                tracks.append(Track.from_payload(raw))
            except (ValueError, AttributeError) as e:
                logger.warning("Skipping malformed track: %s", e)
        return tracks
