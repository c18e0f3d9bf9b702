"""Shared type aliases used across portalserve modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: receives the request (or nothing) and returns a response value
Handler: TypeAlias = Callable[..., Any]

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
