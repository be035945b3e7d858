from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from homeguard.notification.base import NotificationEvent

log = logging.getLogger(__name__)

EVENT_HEADER = "X-Homeguard-Event"
SEVERITY_HEADER = "X-Homeguard-Severity"


@dataclass(frozen=True)
class WebhookConfig:
    """
    Target endpoint for webhook notifications.

    Parameters
    ----------
    url
        Endpoint receiving JSON POST requests.
    timeout_s
        Per-request timeout in seconds.
    verify_tls
        Verify the server certificate (disable only for local test servers).
    auth_header
        Full Authorization header value, e.g. "Bearer <token>".
    """

    url: str
    timeout_s: float = 2.0
    verify_tls: bool = True
    auth_header: Optional[str] = None


class WebhookNotifier:
    """
    Deliver notification events as JSON POST requests.

    The body is ``event.payload``. Routing metadata travels in headers so a
    receiver can filter without parsing the body:

    - ``X-Homeguard-Event``: event type
    - ``X-Homeguard-Severity``: severity, when the event has one

    Performs blocking network I/O, so it is meant to run inside
    `NotificationWorkerThread`. Any HTTP error status is raised.
    """

    def __init__(self, cfg: WebhookConfig):
        self._cfg = cfg

    def headers_for(self, event: NotificationEvent) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", EVENT_HEADER: event.type}
        if event.severity:
            headers[SEVERITY_HEADER] = event.severity
        if self._cfg.auth_header:
            headers["Authorization"] = self._cfg.auth_header
        return headers

    def notify(self, event: NotificationEvent) -> None:
        """
        Raises
        ------
        requests.HTTPError
            On a 4xx/5xx response.
        requests.RequestException
            On connection errors and timeouts.
        """
        resp = requests.post(
            self._cfg.url,
            json=event.payload,
            headers=self.headers_for(event),
            timeout=self._cfg.timeout_s,
            verify=self._cfg.verify_tls,
        )
        resp.raise_for_status()
        log.debug("Delivered %s notification to %s (HTTP %s)", event.type, self._cfg.url, resp.status_code)
