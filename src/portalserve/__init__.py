"""portalserve — the admin portal's frontend file server.

Serves ``assets/`` and ``pages/`` with clean URLs: ``/pages/accounts``
is answered with ``pages/accounts.html``. The root redirects to the
sign-in page, and anything unknown gets the sign-in page with a 404.

Basic usage::

    from portalserve import AppConfig, create_app

    app = create_app(AppConfig(root_dir="./frontend"))
    app.run()

Or from a shell: ``portalserve --root ./frontend``.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "PortalServeError",
    "Redirect",
    "Request",
    "Response",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import portalserve`` fast while providing a clean top-level API.
    """
    if name == "App":
        from portalserve.app import App

        return App

    if name == "AppConfig":
        from portalserve.config import AppConfig

        return AppConfig

    if name == "create_app":
        from portalserve.portal import create_app

        return create_app

    if name == "Request":
        from portalserve.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from portalserve.http import response as _resp

        return getattr(_resp, name)

    if name in ("Middleware", "Next"):
        from portalserve.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "PortalServeError",
    ):
        from portalserve import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
