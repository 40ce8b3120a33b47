"""Built-in middleware: CORS.

Adds CORS headers to the shared response builder for allowed origins
and answers preflight requests directly.
"""

from dataclasses import dataclass

from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseBuilder


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    All fields have secure defaults (nothing is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes


class CORSMiddleware:
    """Standards-compliant CORS middleware.

    Handles:
    - Preflight ``OPTIONS`` requests (answers 204 with CORS headers)
    - Simple and actual requests (adds CORS headers, then continues)
    - Credential support (``Access-Control-Allow-Credentials``)
    - Wildcard origins (``"*"``) when credentials are disabled

    Register it as global middleware so it runs before route matching::

        app.use(CORSMiddleware(CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST", "PUT"),
            allow_headers=("Content-Type", "Authorization"),
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        """Check if the origin is in the allow list."""
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, res: ResponseBuilder, origin: str) -> None:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            res.header("Access-Control-Allow-Origin", "*")
        else:
            res.header("Access-Control-Allow-Origin", origin)
            res.header("Vary", "Origin")

        if cfg.allow_credentials:
            res.header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            res.header("Access-Control-Expose-Headers", ", ".join(cfg.expose_headers))

    def _preflight_response(
        self, res: ResponseBuilder, origin: str, request_method: str | None
    ) -> Response:
        cfg = self.config
        self._add_cors_headers(res, origin)

        if request_method:
            res.header("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))
        if cfg.allow_headers:
            res.header("Access-Control-Allow-Headers", ", ".join(cfg.allow_headers))
        res.header("Access-Control-Max-Age", str(cfg.max_age))

        return res.empty(204)

    def __call__(self, request: Request, res: ResponseBuilder) -> Response | None:
        """Process the request with CORS handling."""
        origin = request.headers.get("origin")

        # Not a CORS request, or not one we serve
        if origin is None or not self._is_allowed_origin(origin):
            return None

        if request.method == "OPTIONS":
            request_method = request.headers.get("access-control-request-method")
            return self._preflight_response(res, origin, request_method)

        self._add_cors_headers(res, origin)
        return None
