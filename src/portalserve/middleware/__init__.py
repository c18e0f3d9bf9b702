"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    CleanURLMiddleware -- Serve extensionless URLs from .html files
    StaticFiles -- Serve static files from a directory
"""

from portalserve.middleware.clean_urls import (
    Bypass,
    Candidates,
    CleanURLConfig,
    CleanURLMiddleware,
    classify,
)
from portalserve.middleware.protocol import Middleware, Next
from portalserve.middleware.static import StaticFiles

__all__ = [
    "Bypass",
    "Candidates",
    "CleanURLConfig",
    "CleanURLMiddleware",
    "Middleware",
    "Next",
    "StaticFiles",
    "classify",
]
