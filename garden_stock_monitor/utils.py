"""Helper utilities.

This module centralises creating configured HTTP sessions and turning
`requests` failures into the package's own error kinds.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests
from requests import Response

from .errors import FetchError


logger = logging.getLogger(__name__)


def get_http_session(headers: Optional[Mapping[str, str]] = None) -> requests.Session:
    """Return a new HTTP session with the given default headers.

    Caller is responsible for closing the session or letting it be
    garbage collected.
    """
    session = requests.Session()
    if headers:
        session.headers.update(dict(headers))
    # Respect environment proxies if configured (requests does this by default)
    return session


def raise_for_status(resp: Response) -> None:
    """Raise :class:`FetchError` for 4xx/5xx responses."""
    try:
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(str(e)) from e


__all__ = ["get_http_session", "raise_for_status"]
