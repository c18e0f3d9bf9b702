"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from portalserve.errors import ConfigurationError
from portalserve.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a route or error handler's return value to a Response.

    Dispatch order:

    1. ``Response``      -> pass through
    2. ``Redirect``      -> status + Location header
    3. ``str``           -> 200, text/html
    4. ``bytes``         -> 200, application/octet-stream
    5. ``(value, int)``  -> negotiate value, override status
    """
    match value:
        case Response():
            return value
        case Redirect():
            return value.to_response()
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return a Response, Redirect, str, bytes, or (value, status)."
            )
            raise ConfigurationError(msg)
