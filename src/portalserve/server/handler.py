"""ASGI handler — translates ASGI scope/messages to portalserve types.

The only component that touches raw ASGI for HTTP requests. Converts
the scope to a typed Request, dispatches through middleware and routing,
and sends the Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from portalserve._internal.asgi import Receive, Scope, Send
from portalserve._internal.invoke import invoke
from portalserve.errors import HTTPError
from portalserve.http.request import Request
from portalserve.http.response import Response
from portalserve.middleware.protocol import Next
from portalserve.routing.router import Router
from portalserve.server.errors import handle_http_error, handle_internal_error
from portalserve.server.negotiation import negotiate
from portalserve.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    # Innermost handler: explicit routes
    async def dispatch(req: Request) -> Response:
        match = router.match(req.method, req.path)
        routed = Request.from_asgi(scope, receive, path_params=match.path_params)
        return negotiate(await _call_route(match.route.handler, routed))

    # Wrap middleware around the dispatch, first added = outermost
    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next

    try:
        response = await handler(request)
    except HTTPError as exc:
        try:
            response = await handle_http_error(exc, request, error_handlers, debug)
        except Exception as inner:
            response = await handle_internal_error(inner, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers)

    await send_response(response, send, head=request.is_head)


async def _call_route(handler: Callable[..., Any], request: Request) -> Any:
    """Call a route handler, passing the request only if it takes one."""
    if inspect.signature(handler).parameters:
        return await invoke(handler, request)
    return await invoke(handler)
