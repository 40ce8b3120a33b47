"""Built-in fallback responses: routing misses, failed validation, faults."""

import logging
import traceback

from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseBuilder
from switchyard.validation.issues import ValidationError

logger = logging.getLogger("switchyard.server")


def not_found_response(res: ResponseBuilder) -> Response:
    """The default 404: ``{"success": false, "error": "404 Not Found."}``."""
    return res.status(404).json({"success": False, "error": "404 Not Found."})


def validation_error_response(res: ResponseBuilder, error: ValidationError) -> Response:
    """The 400 for a failed schema, carrying every issue of that section."""
    return res.status(400).json(
        {
            "success": False,
            "error": "400 Bad Request.",
            "details": error.to_list(),
        }
    )


def internal_error_response(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log an unhandled exception and build a plain-text 500.

    With ``debug`` the body carries the traceback.
    """
    logger.exception("500 %s %s", request.method, request.path)
    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)
    return Response(body="Internal Server Error", status=500)
