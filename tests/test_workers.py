"""Tests for lyrictype.ui.workers – liveness tokens and the request runnable."""

from __future__ import annotations

from lyrictype.core.errors import ApiError
from lyrictype.ui.workers import LivenessToken, RequestWorker


class TestLivenessToken:
    def test_initial_generation_is_current(self):
        token = LivenessToken()
        assert token.is_current(token.generation)

    def test_advance_makes_old_generation_stale(self):
        token = LivenessToken()
        old = token.generation
        new = token.advance()
        assert not token.is_current(old)
        assert token.is_current(new)

    def test_invalidate_kills_everything(self):
        token = LivenessToken()
        gen = token.generation
        token.invalidate()
        assert not token.is_current(gen)
        assert not token.is_current(token.generation)


class TestRequestWorker:
    def test_success_emits_result(self):
        results, failures = [], []
        worker = RequestWorker(lambda: [1, 2])
        worker.signals.succeeded.connect(results.append)
        worker.signals.failed.connect(failures.append)
        worker.run()
        assert results == [[1, 2]]
        assert failures == []

    def test_api_error_emits_failure(self):
        def failing():
            raise ApiError("offline")

        results, failures = [], []
        worker = RequestWorker(failing)
        worker.signals.succeeded.connect(results.append)
        worker.signals.failed.connect(failures.append)
        worker.run()
        assert results == []
        assert failures == ["offline"]

    def test_unexpected_error_emits_failure(self, caplog):
        def closed_client():
            raise RuntimeError("Cannot send a request, as the client has been closed.")

        results, failures = [], []
        worker = RequestWorker(closed_client)
        worker.signals.succeeded.connect(results.append)
        worker.signals.failed.connect(failures.append)
        with caplog.at_level("ERROR", logger="lyrictype.ui.workers"):
            worker.run()
        assert results == []
        assert failures == ["Cannot send a request, as the client has been closed."]
        assert "Request failed unexpectedly" in caplog.text

    def test_unexpected_error_without_message_names_type(self):
        def failing():
            raise KeyError()

        failures = []
        worker = RequestWorker(failing)
        worker.signals.failed.connect(failures.append)
        worker.run()
        assert failures == ["KeyError"]
