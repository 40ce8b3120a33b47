"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(request: Request, res: ResponseBuilder) -> object | None

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing
"""

from switchyard.middleware.cors import CORSConfig, CORSMiddleware
from switchyard.middleware.protocol import Middleware

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
]
