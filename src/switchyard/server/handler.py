"""ASGI handler: translates ASGI scope/messages to switchyard types.

The only component that touches raw ASGI directly. Builds a Request
from the scope, reads and decodes the body, runs the dispatcher and
sends the Response back through ASGI send().
"""

import logging

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard.config import AppConfig
from switchyard.http.headers import Headers
from switchyard.http.query import parse_query
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.server.body import decode_body
from switchyard.server.dispatch import Dispatcher
from switchyard.server.errors import internal_error_response
from switchyard.server.sender import send_response

logger = logging.getLogger("switchyard.server")


class _BodyTooLarge(Exception):
    """Raised internally when the body exceeds ``max_content_length``."""


async def read_body(receive: Receive, limit: int) -> bytes:
    """Collect every ``http.request`` chunk, failing fast past *limit* bytes."""
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise _BodyTooLarge
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def build_request(scope: Scope, headers: Headers, body: object) -> Request:
    """Create a Request from an HTTP scope, its headers and an already-decoded body."""
    client = scope.get("client")
    return Request(
        method=scope["method"].upper(),
        path=scope.get("path") or "/",
        headers=headers,
        body=body,
        query=parse_query(scope.get("query_string", b"")),
        client=tuple(client) if client else None,
    )


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    method = scope["method"].upper()
    headers = Headers.from_asgi(scope.get("headers", ()))

    declared = headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > config.max_content_length:
        logger.debug("Rejected %s %s: declared body too large", method, scope.get("path"))
        await send_response(_too_large(), send)
        return

    try:
        raw = await read_body(receive, config.max_content_length)
    except _BodyTooLarge:
        logger.debug("Rejected %s %s: body too large", method, scope.get("path"))
        await send_response(_too_large(), send)
        return

    body = decode_body(
        method, headers.get("content-type"), raw, charset=config.default_charset
    )
    request = build_request(scope, headers, body)

    try:
        response = await dispatcher.dispatch(request)
    except Exception as exc:
        response = internal_error_response(exc, request, debug=config.debug)

    await send_response(response, send, head=method == "HEAD")


def _too_large() -> Response:
    return Response(body="Payload Too Large", status=413)
