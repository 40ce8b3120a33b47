"""Switchyard application class.

Mutable during setup (route registration, middleware, mounting).
Frozen at runtime when ``dispatch()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from typing import Any

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.types import NotFoundHandler
from switchyard.config import AppConfig
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.routing.registry import RouteTable
from switchyard.routing.router import Router
from switchyard.server.dispatch import Dispatcher
from switchyard.server.handler import handle_request

logger = logging.getLogger("switchyard.server")


class App(Router):
    """The switchyard application.

    An ``App`` is a ``Router`` whose own middleware runs globally, before
    route matching, for every request. Routers mounted on it keep their
    middleware scoped to their routes.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread snapshots the route table, even when several ASGI
        workers call ``__call__()`` concurrently on first request.
    """

    __slots__ = ("_dispatcher", "_freeze_lock", "_frozen", "_not_found", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config: AppConfig = config or AppConfig()
        self._not_found: NotFoundHandler | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Registration --

    def not_found(self, handler: NotFoundHandler | None = None) -> Any:
        """Set the handler for requests no route answers.

        Returning ``None`` from it falls back to the built-in 404 JSON.
        Usable as a decorator::

            @app.not_found
            def missing(req, res):
                return res.status(404).text(f"Nothing at {req.path}")
        """
        def decorator(func: NotFoundHandler) -> NotFoundHandler:
            self._check_not_frozen()
            self._not_found = func
            return func

        if handler is None:
            return decorator
        return decorator(handler)

    # -- Runtime --

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def table(self) -> RouteTable:
        """The frozen route table. Freezes the app if needed."""
        return self._ensure_frozen().table

    def freeze(self) -> None:
        """Freeze now instead of on the first request."""
        self._ensure_frozen()

    async def dispatch(self, request: Request) -> Response:
        """Run one request through the pipeline. Exceptions from user code propagate."""
        return await self._ensure_frozen().dispatch(request)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        dispatcher = self._ensure_frozen()
        await handle_request(scope, receive, send, dispatcher=dispatcher, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors surface before
        the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> Dispatcher:
        """Thread-safe freeze with double-check locking."""
        if self._dispatcher is not None:
            return self._dispatcher
        with self._freeze_lock:
            if self._dispatcher is None:
                self._dispatcher = self._freeze()
            return self._dispatcher

    def _freeze(self) -> Dispatcher:
        """Snapshot routes and middleware into a Dispatcher.

        MUST only be called while holding _freeze_lock.
        """
        dispatcher = Dispatcher(
            table=self.registry.freeze(),
            middleware=self.middleware,
            not_found=self._not_found,
            config=self.config,
        )
        self._frozen = True
        logger.debug(
            "Frozen with %d route(s), %d global middleware",
            len(dispatcher.table),
            len(dispatcher.middleware),
        )
        return dispatcher

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware and routers before the first dispatch."
            )
            raise RuntimeError(msg)
