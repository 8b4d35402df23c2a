from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from lyrictype.core.errors import ApiError

logger = logging.getLogger(__name__)

SAVE_FAILED_NOTICE = "Your result could not be saved. Your score is shown below."


@dataclass(frozen=True)
class SessionRecord:
    """One completed session, as inserted into the progress store."""

    user_id: str
    song_id: str
    wpm: int
    accuracy: int


class CompletionReporter:
    """Sends the final metrics of a finished session to the progress backend.

    Anonymous sessions (no *user_id*) are not persisted. Backend failures are
    turned into a notice passed to *on_notice*; they never propagate.

    With ``deferred=True`` the *recorder* only schedules the save (e.g. on a
    worker thread) and the caller reports the outcome later through
    :meth:`on_saved` or :meth:`on_failed`.
    """

    def __init__(
        self,
        recorder: Callable[[SessionRecord], None],
        user_id: Optional[str] = None,
        on_notice: Optional[Callable[[str], None]] = None,
        deferred: bool = False,
    ) -> None:
        self._recorder = recorder
        self._user_id = user_id
        self._on_notice = on_notice
        self._deferred = deferred

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    def report(self, song_id: str, wpm: int, accuracy: int) -> bool:
        """Persist one session record.

        Returns True if it was saved, or for a deferred recorder, if the save
        was handed off.
        """
        if not self._user_id:
            logger.info("No signed-in user; skipping save for song %s", song_id)
            return False
        record = SessionRecord(user_id=self._user_id, song_id=song_id, wpm=wpm, accuracy=accuracy)
        try:
            self._recorder(record)
        except ApiError as e:
            self.on_failed(record, str(e))
            return False
        if self._deferred:
            logger.debug("Save for song %s scheduled", song_id)
        else:
            self.on_saved(record)
        return True

    def on_saved(self, record: SessionRecord) -> None:
        logger.info(
            "Saved session: song=%s wpm=%d accuracy=%d%%", record.song_id, record.wpm, record.accuracy
        )

    def on_failed(self, record: SessionRecord, message: str) -> None:
        logger.warning("Could not save session for song %s: %s", record.song_id, message)
        if self._on_notice is not None:
            self._on_notice(SAVE_FAILED_NOTICE)
