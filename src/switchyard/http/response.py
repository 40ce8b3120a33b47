"""HTTP responses: a frozen ``Response`` and the per-request ``ResponseBuilder``.

Every pipeline step receives the same builder. Steps that only want to
decorate the eventual response (CORS, caching headers) set status or
headers on it and return ``None``; the step that answers calls one of
the terminal methods and returns the ``Response`` it produces.
"""

import json as json_module
import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass, replace
from os import PathLike
from pathlib import Path
from typing import Any

_SHORT_TYPES: dict[str, str] = {
    "json": "application/json",
    "html": "text/html; charset=utf-8",
    "text": "text/plain; charset=utf-8",
    "txt": "text/plain; charset=utf-8",
}


def resolve_content_type(kind: str) -> str:
    """Resolve a short name, file extension or media type to a media type.

    ``"json"`` -> ``application/json``, ``"png"`` -> ``image/png``,
    ``"text/csv"`` is returned as-is, unknown names fall back to
    ``application/octet-stream``.
    """
    if kind in _SHORT_TYPES:
        return _SHORT_TYPES[kind]
    if "/" in kind:
        return kind
    guessed, _ = mimetypes.guess_type(f"file.{kind.lstrip('.')}")
    return guessed or "application/octet-stream"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct directly or through a ``ResponseBuilder``; chain
    ``.with_*()`` calls to derive variants. Each call returns a new
    ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)

    def header(self, name: str) -> str | None:
        """Return the first header named *name* (case-insensitive), or None."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


class ResponseBuilder:
    """Mutable response state shared by every step of one request.

    ``status``, ``header`` and ``content_type`` return the builder so
    calls chain; ``send``, ``json``, ``text``, ``redirect`` and ``empty``
    are terminal and return a frozen ``Response``. So is ``send_file``::

        return res.status(201).header("Location", "/users/7").json({"id": 7})
    """

    __slots__ = ("_content_type", "_headers", "_status")

    def __init__(self) -> None:
        self._status = 200
        self._headers: dict[str, str] = {}
        self._content_type: str | None = None

    def status(self, code: int) -> "ResponseBuilder":
        """Set the status code for the eventual response."""
        self._status = code
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Set a header, replacing any earlier value under the same name."""
        self._headers[name] = value
        return self

    def content_type(self, kind: str) -> "ResponseBuilder":
        """Set the content type from a short name, extension or media type."""
        self._content_type = resolve_content_type(kind)
        return self

    @property
    def current_status(self) -> int:
        return self._status

    @property
    def headers(self) -> dict[str, str]:
        """A copy of the headers set so far."""
        return dict(self._headers)

    # -- Terminal operations --

    def send(self, body: str | bytes | None = None) -> Response:
        """Finish with a raw body."""
        if body is None:
            body = b""
        if self._content_type is not None:
            content_type = self._content_type
        elif isinstance(body, bytes) and body:
            content_type = "application/octet-stream"
        else:
            content_type = "text/plain; charset=utf-8"
        return Response(
            body=body,
            status=self._status,
            content_type=content_type,
            headers=tuple(self._headers.items()),
        )

    def json(self, value: Any) -> Response:
        """Finish with *value* serialized as JSON."""
        self._content_type = "application/json"
        return self.send(json_module.dumps(value))

    def text(self, value: str) -> Response:
        """Finish with a plain-text body."""
        self._content_type = "text/plain; charset=utf-8"
        return self.send(value)

    def redirect(self, url: str, status: int = 307) -> Response:
        """Finish with a redirect to *url* (307 by default)."""
        self._status = status
        self._headers["Location"] = url
        return self.send(b"")

    def send_file(self, path: str | PathLike[str]) -> Response:
        """Finish with the content of the file at *path*.

        The content type comes from the file extension and
        ``Content-Length`` is set to the file size. A missing file raises
        ``FileNotFoundError``.
        """
        file_path = Path(path)
        content = file_path.read_bytes()
        extension = file_path.suffix.lstrip(".")
        self._content_type = (
            resolve_content_type(extension) if extension else "application/octet-stream"
        )
        self._headers["Content-Length"] = str(len(content))
        return self.send(content)

    def empty(self, status: int | None = None) -> Response:
        """Finish with no body, optionally overriding the status."""
        if status is not None:
            self._status = status
        return self.send(b"")
