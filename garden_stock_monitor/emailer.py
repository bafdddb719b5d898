"""Email notifier via the SendGrid v3 mail API.

Sends one message per call with a plain-text and an HTML list of lines.
Sender and recipient are the same verified address unless configured
otherwise.
"""

from __future__ import annotations

import html
import logging
from typing import Optional, Sequence

import requests

from . import config
from .errors import DeliveryError
from .utils import get_http_session

logger = logging.getLogger(__name__)


def _build_bodies(lines: Sequence[str]) -> tuple[str, str]:
    """Return (plain_text, html) bodies."""
    plain = "Stock update:\n\n" + "\n".join(lines)
    li_html = "".join("<li>{}</li>".format(html.escape(l)) for l in lines)
    body = "<p>Stock update:</p><ul>{}</ul>".format(li_html)
    return plain, body


class EmailNotifier:
    """Formats change lines and dispatches them as one email.

    ``api_key`` is the already-resolved credential; when it is None the
    notifier stays disabled and every send reports failure without a request.
    """

    def __init__(
        self,
        api_key: Optional[str],
        to_address: str = config.YOUR_EMAIL,
        from_address: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_url: str = config.SENDGRID_API_URL,
        timeout: float = config.EMAIL_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.to_address = to_address
        self.from_address = from_address or to_address
        self.api_url = api_url
        self.timeout = timeout
        self._session = session

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = get_http_session()
        return self._session

    def _payload(self, subject: str, lines: Sequence[str]) -> dict:
        plain, body = _build_bodies(lines)
        return {
            "personalizations": [{"to": [{"email": self.to_address}]}],
            "from": {"email": self.from_address},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": plain},
                {"type": "text/html", "value": body},
            ],
        }

    def _post(self, payload: dict) -> None:
        try:
            resp = self.session.post(
                self.api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DeliveryError(str(e)) from e
        if not 200 <= resp.status_code < 300:
            raise DeliveryError(f"SendGrid returned {resp.status_code}: {resp.text[:200]}")

    def send(self, subject: str, lines: Sequence[str]) -> bool:
        """Send ``lines`` under ``subject``; return whether the provider accepted it."""
        if not self.enabled:
            logger.error("Email not sent (subject=%s): no usable API key", subject)
            return False
        try:
            self._post(self._payload(subject, lines))
        except DeliveryError as e:
            logger.error("Error sending email (subject=%s): %s", subject, e)
            return False
        logger.info("Email sent to %s (subject=%s)", self.to_address, subject)
        return True


__all__ = ["EmailNotifier"]
