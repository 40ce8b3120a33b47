"""The request dispatch pipeline.

One ``Dispatcher`` is built when the app freezes and shared by every
request. Per request it runs, in order:

1. path normalization
2. global middleware (first non-empty return short-circuits)
3. the pre-flight short-circuit (empty 200)
4. route matching for the request method (miss -> not-found)
5. merging matched params into ``request.params``
6. schema validation: query, params, body (failure -> 400)
7. route middleware (same short-circuit rule)
8. the handler (empty return -> not-found)

Matching and validation failures never raise. Anything user code
raises propagates to the caller untouched.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard._internal.types import NotFoundHandler
from switchyard.config import AppConfig
from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseBuilder
from switchyard.middleware.protocol import Middleware
from switchyard.routing.pattern import normalize_path
from switchyard.routing.registry import RouteTable
from switchyard.routing.route import Route
from switchyard.server.errors import not_found_response, validation_error_response
from switchyard.server.negotiation import finalize, is_empty
from switchyard.validation.issues import ValidationError

logger = logging.getLogger("switchyard.server")


@dataclass(frozen=True, slots=True)
class Dispatcher:
    """Frozen runtime pipeline over an immutable route table."""

    table: RouteTable
    middleware: tuple[Middleware, ...] = ()
    not_found: NotFoundHandler | None = None
    config: AppConfig = AppConfig()

    async def dispatch(self, request: Request) -> Response:
        """Run *request* through the pipeline and return exactly one Response."""
        request.path = normalize_path(request.path)
        res = ResponseBuilder()

        result = await self._run_chain(self.middleware, request, res)
        if result is not None:
            logger.debug("Global middleware answered %s %s", request.method, request.path)
            return result

        if request.method == self.config.preflight_method:
            return res.empty(200)

        match = self.table.match(request.method, request.path)
        if match is None:
            logger.debug("No route for %s %s", request.method, request.path)
            return await self._not_found(request, res)

        request.params = {**request.params, **match.params}
        route = match.route

        failure = self._validate(route, request)
        if failure is not None:
            section, error = failure
            logger.debug(
                "Rejected %s %s: invalid %s (%s)", request.method, request.path, section, error
            )
            return validation_error_response(res, error)

        result = await self._run_chain(route.middleware, request, res)
        if result is not None:
            logger.debug("Route middleware answered %s %s", request.method, request.path)
            return result

        value = await invoke(route.handler, request, res)
        if is_empty(value):
            logger.debug(
                "Handler for %s %s returned no response", request.method, request.path
            )
            return await self._not_found(request, res)
        return finalize(value, res)

    # -- Internal --

    @staticmethod
    async def _run_chain(
        chain: Iterable[Middleware], request: Request, res: ResponseBuilder
    ) -> Response | None:
        for step in chain:
            value = await invoke(step, request, res)
            if not is_empty(value):
                return finalize(value, res)
        return None

    @staticmethod
    def _validate(route: Route, request: Request) -> tuple[str, ValidationError] | None:
        """Validate declared sections in order and write coerced values back.

        Returns the first failing section and its error, or ``None``.
        """
        if route.schemas is None:
            return None
        for section, schema in route.schemas.sections():
            current: Any = getattr(request, section)
            result = schema.safe_parse(current)
            if result.error is not None:
                return section, result.error
            setattr(request, section, result.data)
        return None

    async def _not_found(self, request: Request, res: ResponseBuilder) -> Response:
        if self.not_found is not None:
            value = await invoke(self.not_found, request, res)
            if not is_empty(value):
                return finalize(value, res)
        return not_found_response(res)
