"""Player intent queue between input producers and the SimulationClock."""

from __future__ import annotations

import logging
import queue
import threading

from mazerun.core.enums import Direction

logger = logging.getLogger(__name__)


class CommandQueue:
    """Directional intents from any thread, drained by the clock's thread.

    Once closed (the clock stopped), the queue refuses new intents and
    discards anything still pending, so nothing reaches a dead clock or a
    state machine that has been rebuilt.
    """

    __slots__ = ("_queue", "_closed")

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Direction] = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def empty(self) -> bool:
        return self._queue.empty()

    def push(self, direction: Direction) -> bool:
        """Queue *direction*. Returns False if the queue is closed."""
        if self._closed.is_set():
            logger.debug("Dropped %s intent: queue closed", direction.name)
            return False
        self._queue.put_nowait(direction)
        return True

    def drain(self) -> list[Direction]:
        """Pending intents in arrival order; always empty after ``close``."""
        if self._closed.is_set():
            return []
        return self._take_all()

    def close(self) -> None:
        """Refuse further intents and drop the pending ones."""
        self._closed.set()
        dropped = self._take_all()
        if dropped:
            logger.debug("Intent queue closed; dropped %d pending intent(s)", len(dropped))

    def _take_all(self) -> list[Direction]:
        intents: list[Direction] = []
        while True:
            try:
                intents.append(self._queue.get_nowait())
            except queue.Empty:
                return intents
