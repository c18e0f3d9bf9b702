"""The admin portal frontend: pipeline assembly.

Request flow, outermost first::

    /assets/*           StaticFiles(assets/)
    extensionless URL   CleanURLMiddleware  (<root>/P.html, pages/<name>.html)
    /pages/*            StaticFiles(pages/)
    GET /               redirect to the sign-in page
    anything else       404 with the sign-in page as body
"""

import logging

from portalserve._internal.files import is_file, read_file
from portalserve.app import App
from portalserve.config import AppConfig
from portalserve.errors import ConfigurationError
from portalserve.http.response import Redirect, Response
from portalserve.middleware.clean_urls import CleanURLConfig, CleanURLMiddleware
from portalserve.middleware.static import StaticFiles

logger = logging.getLogger("portalserve.server")


def create_app(config: AppConfig | None = None) -> App:
    """Build the frontend server for *config*.

    Raises ``ConfigurationError`` if the site root is not a directory.
    Missing ``assets/``, ``pages/`` or sign-in page only log a warning at
    startup; requests for them fall through to the soft 404.
    """
    config = config or AppConfig()
    root = config.root_path
    if not root.is_dir():
        msg = f"Site root {root} is not a directory."
        raise ConfigurationError(msg)

    app = App(config)

    app.add_middleware(
        StaticFiles(config.assets_path, prefix=config.assets_url, cache_control=config.cache_control)
    )
    app.add_middleware(
        CleanURLMiddleware(
            CleanURLConfig(
                root=root,
                pages_dir=config.pages_dir,
                suffix=config.page_suffix,
                cache_control=config.cache_control,
            )
        )
    )
    app.add_middleware(
        StaticFiles(config.pages_path, prefix=config.pages_url, cache_control=config.cache_control)
    )

    sign_in_url = config.sign_in_url
    sign_in_file = config.sign_in_file

    @app.route("/")
    def index() -> Redirect:
        return Redirect(sign_in_url)

    @app.error(404)
    async def soft_not_found() -> Response:
        if not await is_file(sign_in_file):
            return Response(body="Not Found", status=404, content_type="text/plain; charset=utf-8")
        return Response(body=await read_file(sign_in_file), status=404)

    @app.on_startup
    def check_layout() -> None:
        for directory in (config.assets_path, config.pages_path):
            if not directory.is_dir():
                logger.warning("Directory %s is missing; its URLs will 404.", directory)
        if not sign_in_file.is_file():
            logger.warning("Sign-in page %s is missing; 404s will be plain text.", sign_in_file)

    return app
