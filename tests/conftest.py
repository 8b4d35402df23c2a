"""Shared fakes for session, playback and reporter tests."""

from __future__ import annotations

from typing import List

import pytest

from lyrictype.core.playback import PlaybackController
from lyrictype.core.reporter import CompletionReporter, SessionRecord


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    def __init__(self) -> None:
        self.active = False
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        self.active = True
        self.starts += 1

    def stop(self) -> None:
        self.active = False
        self.stops += 1


class FakePlayer:
    def __init__(self, url: str, fail_on_play: bool = False) -> None:
        self.url = url
        self.fail_on_play = fail_on_play
        self.playing = False
        self.position = 1234
        self.closed = False

    def play(self) -> None:
        if self.fail_on_play:
            raise RuntimeError("no audio device")
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def set_position(self, ms: int) -> None:
        self.position = ms

    def close(self) -> None:
        self.closed = True


class PlayerFactory:
    def __init__(self, fail_on_play: bool = False) -> None:
        self.fail_on_play = fail_on_play
        self.created: List[FakePlayer] = []

    def __call__(self, url: str) -> FakePlayer:
        player = FakePlayer(url, fail_on_play=self.fail_on_play)
        self.created.append(player)
        return player


class RecordingRecorder:
    def __init__(self) -> None:
        self.records: List[SessionRecord] = []

    def __call__(self, record: SessionRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture()
def player_factory() -> PlayerFactory:
    return PlayerFactory()


@pytest.fixture()
def playback(player_factory: PlayerFactory) -> PlaybackController:
    return PlaybackController(player_factory=player_factory)


@pytest.fixture()
def recorder() -> RecordingRecorder:
    return RecordingRecorder()


@pytest.fixture()
def reporter(recorder: RecordingRecorder) -> CompletionReporter:
    return CompletionReporter(recorder=recorder, user_id="user-1")
