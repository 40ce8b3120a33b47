"""The request context handed through the dispatch pipeline.

Unlike the response, a request is deliberately mutable: the dispatcher
writes matched ``params`` and coerced ``query``/``params``/``body`` back
onto it, and middleware passes state to the handler through ``data``.
Each request is owned by exactly one pipeline, so no locking is needed.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from switchyard.http.cookies import parse_cookies
from switchyard.http.headers import Headers
from switchyard.http.query import parse_query


@dataclass(slots=True)
class Request:
    """An incoming HTTP request.

    ``body`` is already decoded by the transport (JSON value, form dict,
    text, or ``None``). ``query`` and ``params`` start as string maps and
    are replaced with coerced values when the route declares schemas.

    ``cookies`` and ``ip`` are derived from the headers once, at creation.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    body: Any = None
    query: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    client: tuple[str, int] | None = None
    cookies: dict[str, str] = field(init=False, repr=False)
    ip: str | None = field(init=False)

    def __post_init__(self) -> None:
        self.cookies = parse_cookies(self.headers.get("cookie"))
        forwarded = self.headers.get("x-forwarded-for")
        if forwarded:
            self.ip = forwarded.split(",")[0].strip()
        elif self.client is not None:
            self.ip = self.client[0]
        else:
            self.ip = None

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        query: Mapping[str, str] | str | None = None,
        client: tuple[str, int] | None = None,
    ) -> "Request":
        """Create a request outside of a transport (tests, embedding).

        *query* may be a mapping or a raw query string::

            Request.build("GET", "/users", query="page=2")
        """
        if isinstance(query, str):
            query_map = parse_query(query)
        else:
            query_map = dict(query or {})
        return cls(
            method=method.upper(),
            path=path,
            headers=Headers(headers or {}),
            body=body,
            query=query_map,
            client=client,
        )
