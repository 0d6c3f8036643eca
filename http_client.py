"""Plain HTTP GET helper used for every call to Steam."""

import logging
import re
from urllib.parse import urlencode

import requests

from steamid_config import REQUEST_TIMEOUT_SECONDS
from steam_errors import TransportError

logger = logging.getLogger(__name__)

_KEY_PARAM_PATTERN = re.compile(r"([?&]key=)[^&#\s'\"]*")


def redact(text: str) -> str:
    """Mask the value of any key= query parameter in text (a URL or a message containing one)."""
    return _KEY_PARAM_PATTERN.sub(r"\1***", text)


def build_query_string(params) -> str:
    """
    Build "k1=v1&k2=v2" from a mapping or an iterable of (key, value) pairs, keeping order.
    Values are URL-encoded. Returns "" when there are no params.
    """
    if not params:
        return ""
    pairs = params.items() if hasattr(params, "items") else params
    return urlencode([(str(k), str(v)) for k, v in pairs])


def fetch(url: str, params: dict | None = None, timeout: float = REQUEST_TIMEOUT_SECONDS) -> str:
    """
    GET url (with optional query params) and return the response body as text.
    Raises TransportError on connection failure, timeout or a non-2xx status.
    """
    safe_url = redact(url)
    if params and "key" in params:
        logger.debug("GET %s params=%s", safe_url, {**params, "key": "***"})
    else:
        logger.debug("GET %s params=%s", safe_url, params)
    try:
        resp = requests.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        # requests puts the full URL (key included) in its messages
        message = redact(str(e)) or type(e).__name__
        logger.warning("Request to %s failed: %s", safe_url, message)
        raise TransportError(safe_url, message) from e
    return resp.text
