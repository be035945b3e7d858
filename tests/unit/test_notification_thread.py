"""
Unit tests for homeguard.notification.notification_thread.NotificationWorkerThread.

Validates:
- queued events are delivered to every notifier
- failing notifiers are retried, then counted as failed
- a full queue drops new events instead of blocking
- stop() ends the worker thread
"""

from __future__ import annotations

import time
from typing import List

from homeguard.notification.base import NotificationEvent
from homeguard.notification.notification_thread import NotificationThreadConfig, NotificationWorkerThread


class RecordingNotifier:
    def __init__(self) -> None:
        self.seen: List[NotificationEvent] = []

    def notify(self, event: NotificationEvent) -> None:
        self.seen.append(event)


class FlakyNotifier:
    """Fails the first ``failures`` calls, then succeeds."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    def notify(self, event: NotificationEvent) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError("webhook unreachable")


def _ev(i: int = 0) -> NotificationEvent:
    return NotificationEvent(type="alarm_status", payload={"i": i})


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_worker_delivers_to_all_notifiers() -> None:
    a, b = RecordingNotifier(), RecordingNotifier()
    worker = NotificationWorkerThread([a, b], NotificationThreadConfig(poll_timeout_s=0.05))
    worker.start()
    try:
        worker.emit(_ev(1))
        worker.emit(_ev(2))
        assert _wait_for(lambda: len(a.seen) == 2 and len(b.seen) == 2)
    finally:
        worker.stop()

    assert [e.payload["i"] for e in a.seen] == [1, 2]


def test_worker_retries_then_succeeds() -> None:
    flaky = FlakyNotifier(failures=2)
    cfg = NotificationThreadConfig(retry_count=3, retry_backoff_s=0.001, poll_timeout_s=0.05)
    worker = NotificationWorkerThread([flaky], cfg)
    worker.start()
    try:
        worker.emit(_ev())
        assert _wait_for(lambda: flaky.calls == 3)
    finally:
        worker.stop()

    assert worker.failed == 0
    assert worker.delivered == 1


def test_worker_counts_failure_after_retries() -> None:
    flaky = FlakyNotifier(failures=100)
    cfg = NotificationThreadConfig(retry_count=2, retry_backoff_s=0.001, poll_timeout_s=0.05)
    worker = NotificationWorkerThread([flaky], cfg)
    worker.start()
    try:
        worker.emit(_ev())
        assert _wait_for(lambda: worker.failed == 1)
    finally:
        worker.stop()

    assert flaky.calls == 3


def test_emit_drops_when_queue_is_full() -> None:
    worker = NotificationWorkerThread([RecordingNotifier()], NotificationThreadConfig(max_queue=2))

    for i in range(5):
        worker.emit(_ev(i))

    assert worker.dropped == 3


def test_stop_ends_thread() -> None:
    worker = NotificationWorkerThread([RecordingNotifier()], NotificationThreadConfig(poll_timeout_s=0.05))
    worker.start()

    worker.stop(timeout=2.0)

    assert not worker._thread.is_alive()
