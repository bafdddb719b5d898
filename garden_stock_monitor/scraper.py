from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from .config import FETCH_TIMEOUT_SECONDS, STOCK_DATA_KEY, STOCK_HEADERS, STOCK_URL
from .errors import ExtractionError, FetchError, ParseError
from .utils import get_http_session, raise_for_status

logger = logging.getLogger(__name__)


def extract_json_from_text(text: str, key: str = STOCK_DATA_KEY) -> str:
    """Return the brace-balanced object that follows ``"key":`` in ``text``.

    This is a textual scan: braces inside string values are counted like any
    other brace, so an unbalanced ``{`` or ``}`` inside a quoted string under
    ``key`` will throw the match off. The stocks payload has no such strings.

    Raises :class:`ExtractionError` if the key is missing, no object follows it,
    or the braces never balance before the end of the text.
    """
    not_found = ExtractionError(f"{key} not found")

    key_pos = text.find(f'"{key}"')
    if key_pos == -1:
        raise not_found

    colon_pos = text.find(":", key_pos)
    if colon_pos == -1:
        raise not_found

    start_pos = text.find("{", colon_pos)
    if start_pos == -1:
        raise not_found

    depth = 0
    for i in range(start_pos, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        if depth == 0:
            return text[start_pos:i + 1]

    raise not_found


def parse_stock_payload(text: str, key: str = STOCK_DATA_KEY) -> Any:
    """Extract the object stored under ``key`` and decode it as JSON."""
    json_string = extract_json_from_text(text, key)
    try:
        return json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse extracted JSON: {e}") from e


def fetch_stock_page(
    session: Optional[requests.Session] = None,
    url: str = STOCK_URL,
    timeout: Optional[float] = FETCH_TIMEOUT_SECONDS,
) -> str:
    """GET the stocks page and return its body as text.

    Raises :class:`FetchError` on connection problems or a non-2xx status.
    """
    session = session or get_http_session(STOCK_HEADERS)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Stock page request failed: url=%s error=%s", url, e)
        raise FetchError(str(e)) from e
    raise_for_status(resp)
    logger.debug("Fetched %d characters from %s", len(resp.text), url)
    return resp.text


def fetch_stock_data(
    session: Optional[requests.Session] = None,
    url: str = STOCK_URL,
    key: str = STOCK_DATA_KEY,
) -> Any:
    """Fetch the stocks page and return the decoded ``key`` payload as-is."""
    text = fetch_stock_page(session, url)
    return parse_stock_payload(text, key)


__all__ = [
    "extract_json_from_text",
    "parse_stock_payload",
    "fetch_stock_page",
    "fetch_stock_data",
]
