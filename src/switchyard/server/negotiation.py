"""Content negotiation: maps pipeline return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from switchyard.http.response import Response, ResponseBuilder


def is_empty(value: Any) -> bool:
    """Whether a step returned no response: ``None``, ``""`` or ``b""``.

    An empty return lets the pipeline continue. Empty containers are
    not empty responses: ``{}`` and ``[]`` still answer with JSON.
    """
    return value is None or (isinstance(value, (str, bytes)) and not value)


def negotiate(value: Any) -> Response:
    """Convert a middleware or handler return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``str``                 -> 200, text/plain
    3. ``bytes``               -> 200, application/octet-stream
    4. ``dict`` / ``list``     -> 200, application/json
    5. ``(value, int)``        -> negotiate value, override status
    6. ``(value, int, dict)``  -> negotiate value, override status + headers

    Empty values (see ``is_empty``) are not negotiated; callers treat
    them as "continue".
    """
    match value:
        case Response():
            return value
        case str():
            return Response(body=value, content_type="text/plain; charset=utf-8")
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(body=json_module.dumps(value), content_type="application/json")
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, str, bytes, dict, list or a (value, status) tuple."
            )
            raise TypeError(msg)


def finalize(value: Any, res: ResponseBuilder) -> Response:
    """Negotiate *value* and carry over the builder state middleware left behind.

    Headers set on the builder are added unless the response already has
    a header of that name. A builder status other than 200 applies to
    plain return values (``str``, ``bytes``, ``dict``, ``list``) only.
    """
    response = negotiate(value)
    if res.current_status != 200 and isinstance(value, (str, bytes, dict, list)):
        response = response.with_status(res.current_status)

    present = {name.lower() for name, _ in response.headers}
    missing = {
        name: header
        for name, header in res.headers.items()
        if name.lower() not in present
    }
    if missing:
        response = response.with_headers(missing)
    return response
