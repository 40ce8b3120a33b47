"""Request body decoding by content type.

The dispatcher only ever sees decoded bodies: a JSON value, a form
dict (files included), a string, or ``None`` when there is nothing usable.
"""

import json as json_module
import logging
from typing import Any

from switchyard.http.forms import parse_multipart
from switchyard.http.query import parse_query

logger = logging.getLogger("switchyard.server")

_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _charset(content_type: str | None, default: str) -> str:
    if content_type:
        for param in content_type.split(";")[1:]:
            key, _, value = param.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip('"')
    return default


def decode_body(
    method: str,
    content_type: str | None,
    raw: bytes,
    *,
    charset: str = "utf-8",
) -> Any:
    """Decode *raw* according to *content_type*.

    - ``GET`` and ``HEAD`` carry no body: ``None``
    - ``application/json``: the parsed JSON value
    - ``application/x-www-form-urlencoded``: a dict, last value wins
    - ``multipart/form-data``: a dict of text fields and ``UploadFile`` objects
    - anything else: the text

    An empty body, or one that fails to decode, is ``None``.
    """
    if method in _BODYLESS_METHODS or not raw:
        return None

    media_type = _media_type(content_type)
    try:
        if media_type == "multipart/form-data":
            return parse_multipart(raw, content_type or "")
        text = raw.decode(_charset(content_type, charset))
        if media_type == "application/json":
            return json_module.loads(text)
        if media_type == "application/x-www-form-urlencoded":
            return parse_query(text)
        return text
    except (UnicodeDecodeError, LookupError, ValueError):
        logger.debug("Undecodable %s body (%d bytes)", media_type or "text", len(raw))
        return None
