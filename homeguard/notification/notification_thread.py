from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from homeguard.notification.base import NotificationEvent, Notifier

log = logging.getLogger(__name__)

_SENTINEL = NotificationEvent(type="__stop__", payload={})


@dataclass(frozen=True)
class NotificationThreadConfig:
    """
    Queue and retry settings of the notification worker.

    Parameters
    ----------
    max_queue
        Capacity of the pending-event queue.
    retry_count
        Extra attempts per notifier after the first failure.
    retry_backoff_s
        Base delay; attempt ``n`` waits ``retry_backoff_s * 2**n``.
    poll_timeout_s
        How long the worker blocks on an empty queue before re-checking stop.
    """

    max_queue: int = 2000
    retry_count: int = 3
    retry_backoff_s: float = 0.5
    poll_timeout_s: float = 0.5


class NotificationWorkerThread:
    """
    Background sender for notification events.

    Status listeners call `emit` from the state machine's thread; the worker
    drains the queue and delivers each event to every notifier, retrying with
    exponential backoff.

    Backpressure Policy
    -------------------
    The queue is bounded. When it is full the new event is dropped, counted in
    ``dropped`` and logged, so an unreachable webhook never blocks the
    controller.

    Attributes
    ----------
    delivered
        Successful (event, notifier) deliveries.
    failed
        Deliveries abandoned after all retries.
    dropped
        Events rejected because the queue was full.
    """

    def __init__(self, notifiers: List[Notifier], cfg: Optional[NotificationThreadConfig] = None):
        self._notifiers = list(notifiers)
        self._cfg = cfg or NotificationThreadConfig()
        self._q: "queue.Queue[NotificationEvent]" = queue.Queue(maxsize=self._cfg.max_queue)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, name="notification-worker", daemon=True)
        self.delivered = 0
        self.failed = 0
        self.dropped = 0

    # --- lifecycle ---
    def start(self) -> None:
        if self._thread.is_alive():
            return
        self._thread.start()
        log.info("Notification worker started (%d notifier(s))", len(self._notifiers))

    def stop(self, timeout: float = 2.0) -> None:
        """
        Ask the worker to exit and wait up to ``timeout`` seconds.

        Events still queued are discarded.
        """
        self._stop.set()
        try:
            self._q.put_nowait(_SENTINEL)
        except queue.Full:
            log.debug("Queue full while stopping; worker will exit on its next poll")
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    # --- producer side ---
    def emit(self, event: NotificationEvent) -> None:
        try:
            self._q.put_nowait(event)
        except queue.Full:
            self.dropped += 1
            log.warning("Notification queue full; dropped %s event", event.type)

    # --- worker side ---
    def _loop(self) -> None:
        while not self._stop.is_set():
            try:
                event = self._q.get(timeout=self._cfg.poll_timeout_s)
            except queue.Empty:
                continue
            if event is _SENTINEL:
                return
            for notifier in self._notifiers:
                self._deliver(notifier, event)

    def _deliver(self, notifier: Notifier, event: NotificationEvent) -> None:
        attempts = self._cfg.retry_count + 1
        for attempt in range(attempts):
            try:
                notifier.notify(event)
            except Exception as e:
                if attempt + 1 == attempts:
                    self.failed += 1
                    log.warning("Giving up on %s notification after %d attempt(s): %r", event.type, attempts, e)
                    return
                delay = self._cfg.retry_backoff_s * (2 ** attempt)
                log.debug("Delivery of %s failed (%r); retrying in %.2fs", event.type, e, delay)
                time.sleep(delay)
            else:
                self.delivered += 1
                return
