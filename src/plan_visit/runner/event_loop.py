from __future__ import annotations

import logging
import queue
import threading
from collections import deque

from plan_visit.errors import PlanVisitError
from plan_visit.models.events import Event, Tick
from plan_visit.supervisor.controller import MissionController

logger = logging.getLogger(__name__)


class MissionEventLoop:
    """
    Single consumer draining a bounded event queue into the controller.

    When nothing arrives within ``wait_s`` a ``Tick`` is fed instead, so the
    planning check still runs regularly. Events returned by the controller
    are applied before the next queue read.
    """

    def __init__(self, controller: MissionController, maxsize: int = 64, wait_s: float = 1.0):
        self.controller = controller
        self.wait_s = wait_s
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=maxsize)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def submit(self, event: Event, timeout: float | None = None) -> None:
        """Enqueue from any thread; blocks while the queue is full (raises ``queue.Full`` on timeout)."""
        self._queue.put(event, timeout=timeout)

    def _apply(self, event: Event) -> None:
        pending: deque[Event] = deque([event])
        while pending:
            current = pending.popleft()
            try:
                pending.extend(self.controller.handle(current))
            except PlanVisitError as e:
                logger.warning("%s rejected: %s", type(current).__name__, e)
            except Exception:
                logger.exception("failed to handle %r", current)

    def run_once(self) -> Event:
        try:
            event: Event = self._queue.get(timeout=self.wait_s)
        except queue.Empty:
            event = Tick()
        self._apply(event)
        return event

    def run(self, stop: threading.Event | None = None) -> None:
        stop = stop or self._stop
        logger.debug("event loop started (wait=%.2fs)", self.wait_s)
        while not stop.is_set():
            self.run_once()
        logger.debug("event loop stopped")

    def start(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="plan-visit-loop", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
