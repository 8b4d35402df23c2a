"""Run backend requests off the GUI thread and hand results back via signals."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Set

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from lyrictype.core.errors import ApiError

logger = logging.getLogger(__name__)

# Workers stay referenced until they report back; Qt does not own the Python side.
_in_flight: Set["RequestWorker"] = set()


class LivenessToken:
    """Identifies one generation of a view's state.

    Calling :meth:`invalidate` makes every result captured with the old
    generation stale, so late network replies for a torn-down or superseded
    session are dropped instead of applied.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._alive = True

    @property
    def generation(self) -> int:
        return self._generation

    def advance(self) -> int:
        self._generation += 1
        return self._generation

    def invalidate(self) -> None:
        self._alive = False
        self._generation += 1

    def is_current(self, generation: int) -> bool:
        return self._alive and generation == self._generation


class RequestSignals(QObject):
    succeeded = Signal(object)
    failed = Signal(str)


class RequestWorker(QRunnable):
    def __init__(self, func: Callable[[], Any]) -> None:
        super().__init__()
        self._func = func
        self.signals = RequestSignals()

    def run(self) -> None:
        try:
            result = self._func()
        except ApiError as e:
            self.signals.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Request failed unexpectedly")
            self.signals.failed.emit(str(e) or type(e).__name__)
            return
        self.signals.succeeded.emit(result)


def run_request(
    func: Callable[[], Any],
    on_success: Callable[[Any], None],
    on_failure: Callable[[str], None],
    token: Optional[LivenessToken] = None,
) -> RequestWorker:
    """Schedule *func* on the global thread pool.

    Callbacks run on the GUI thread. When *token* is given, they only run if
    the token's generation is unchanged by the time the reply arrives.
    """
    generation = token.generation if token is not None else 0

    def _guard(callback: Callable[[Any], None]) -> Callable[[Any], None]:
        def _deliver(value: Any) -> None:
            if token is not None and not token.is_current(generation):
                logger.debug("Dropping stale reply for generation %d", generation)
                return
            callback(value)

        return _deliver

    worker = RequestWorker(func)
    worker.signals.succeeded.connect(_guard(on_success))
    worker.signals.failed.connect(_guard(on_failure))
    worker.signals.succeeded.connect(lambda _: _in_flight.discard(worker))
    worker.signals.failed.connect(lambda _: _in_flight.discard(worker))
    _in_flight.add(worker)
    QThreadPool.globalInstance().start(worker)
    return worker
