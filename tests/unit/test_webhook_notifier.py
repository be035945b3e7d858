"""
Unit tests for homeguard.notification.webhook_notifier.

These tests validate webhook notification behavior using mocked HTTP calls:
- correct request parameters passed to requests.post
- event type header and Authorization header handling
- HTTP error propagation via raise_for_status()

No real network requests are made.
"""

from __future__ import annotations

from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
import requests

from homeguard.notification.base import NotificationEvent
from homeguard.notification.webhook_notifier import WebhookConfig, WebhookNotifier


def _mk_event() -> NotificationEvent:
    return NotificationEvent(
        type="alarm_status",
        payload={"k": "v"},
        severity="CRITICAL",
        source="homeguard",
        ts="2026-01-01T10:00:00",
    )


def test_webhook_notifier_posts_payload_without_auth(monkeypatch) -> None:
    """
    notify() should POST the event payload with the event type header and
    the configured options when no auth header is configured.
    """
    mock_response = MagicMock()
    mock_response.raise_for_status.return_value = None

    def fake_post(
        url: str,
        json: Dict[str, Any],
        headers: Dict[str, str],
        timeout: float,
        verify: bool,
    ):
        assert url == "https://example.com/webhook"
        assert json == {"k": "v"}
        assert headers == {
            "Content-Type": "application/json",
            "X-Homeguard-Event": "alarm_status",
            "X-Homeguard-Severity": "CRITICAL",
        }
        assert timeout == 3.0
        assert verify is False
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    notifier = WebhookNotifier(WebhookConfig(url="https://example.com/webhook", timeout_s=3.0, verify_tls=False))
    notifier.notify(_mk_event())

    mock_response.raise_for_status.assert_called_once()


def test_webhook_notifier_posts_payload_with_auth_header(monkeypatch) -> None:
    mock_response = MagicMock()
    mock_response.raise_for_status.return_value = None

    def fake_post(url: str, json: Dict[str, Any], headers: Dict[str, str], timeout: float, verify: bool):
        assert headers["Authorization"] == "Bearer TOKEN"
        assert verify is True
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    notifier = WebhookNotifier(WebhookConfig(url="https://example.com/webhook", auth_header="Bearer TOKEN"))
    notifier.notify(_mk_event())

    mock_response.raise_for_status.assert_called_once()


def test_webhook_notifier_propagates_http_error(monkeypatch) -> None:
    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = requests.HTTPError("HTTP 500")

    def fake_post(*args, **kwargs):
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    notifier = WebhookNotifier(WebhookConfig(url="https://example.com/webhook"))

    with pytest.raises(requests.HTTPError):
        notifier.notify(_mk_event())


def test_severity_header_omitted_when_event_has_none() -> None:
    notifier = WebhookNotifier(WebhookConfig(url="https://example.com/webhook"))

    headers = notifier.headers_for(NotificationEvent(type="arming_status", payload={}))

    assert headers == {"Content-Type": "application/json", "X-Homeguard-Event": "arming_status"}
