"""In-process test clients for switchyard applications.

Requests go through the ASGI interface directly, no HTTP involved, and
come back as the same ``Response`` type used in production.
"""

import json as json_module
from functools import partial
from types import TracebackType
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from anyio.from_thread import BlockingPortal, start_blocking_portal

from switchyard.http.response import Response

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from switchyard.app import App


def _encode_body(
    headers: dict[str, str] | None,
    body: bytes | str | None,
    json: Any,
) -> tuple[dict[str, str], bytes]:
    extra: dict[str, str] = {}
    if json is not None:
        payload = json_module.dumps(json).encode("utf-8")
        extra["content-type"] = "application/json"
    elif isinstance(body, str):
        payload = body.encode("utf-8")
    else:
        payload = body or b""
    return {**extra, **(headers or {})}, payload


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for switchyard applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.post("/users", json={"name": "ada"})
            assert response.status == 201
            assert response.json()["name"] == "ada"
    """

    __slots__ = ("app", "client")

    def __init__(self, app: "App", *, client: tuple[str, int] = ("127.0.0.1", 0)) -> None:
        self.app = app
        self.client = client

    async def __aenter__(self) -> "TestClient":
        self.app.freeze()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers, query=query)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request. ``json`` is serialized and sets the content type."""
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PATCH request."""
        return await self.request("PATCH", path, headers=headers, body=body, json=json)

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def options(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
        query: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part, query_string = path, ""
        if query:
            extra = urlencode(query)
            query_string = f"{query_string}&{extra}" if query_string else extra

        merged, request_body = _encode_body(headers, body, json)
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in merged.items()
        ]
        if request_body:
            raw_headers.append((b"content-length", str(len(request_body)).encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": self.client,
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/plain; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )


class SyncTestClient:
    __test__ = False
    """Blocking wrapper around ``TestClient`` for synchronous tests.

    Runs an event loop in a background thread through an AnyIO blocking
    portal::

        with SyncTestClient(app) as client:
            assert client.get("/health").status == 200
    """

    __slots__ = ("_client", "_portal", "_portal_cm")

    def __init__(self, app: "App", *, backend: str = "asyncio") -> None:
        self._client = TestClient(app)
        self._portal_cm: AbstractContextManager[BlockingPortal] = start_blocking_portal(backend)
        self._portal: BlockingPortal | None = None

    def __enter__(self) -> "SyncTestClient":
        self._portal = self._portal_cm.__enter__()
        self._portal.call(self._client.__aenter__)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        assert self._portal is not None
        self._portal.call(self._client.__aexit__, exc_type, exc, tb)
        self._portal_cm.__exit__(exc_type, exc, tb)
        self._portal = None

    def request(self, method: str, path: str, **kwargs: Any) -> Response:
        """Send an arbitrary request and block until the response is complete."""
        if self._portal is None:
            msg = "SyncTestClient must be used as a context manager."
            raise RuntimeError(msg)
        return self._portal.call(partial(self._client.request, method, path, **kwargs))

    def get(self, path: str, **kwargs: Any) -> Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Response:
        return self.request("DELETE", path, **kwargs)

    def options(self, path: str, **kwargs: Any) -> Response:
        return self.request("OPTIONS", path, **kwargs)
