"""Static file serving middleware.

Serves files from a directory for a URL prefix (``/assets``, ``/pages``).
Directories with an index file are served at their trailing-slash URL.

Falls through to the next handler for non-matching paths and missing
files.
"""

from pathlib import Path

from portalserve._internal.files import guess_content_type, is_dir, is_file, read_file, resolve
from portalserve.http.request import Request
from portalserve.http.response import Response
from portalserve.middleware.protocol import Next


class StaticFiles:
    """Middleware that serves static files from a directory.

    Files are served byte-for-byte for paths under the configured prefix.
    Non-matching paths fall through to the next handler.

    Security: resolves symlinks and verifies the final path is within the
    configured directory to prevent path traversal.

    Usage::

        app.add_middleware(StaticFiles(directory="./assets", prefix="/assets"))
    """

    __slots__ = ("_cache_control", "_directory", "_index", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=0",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

        # Normalize prefix: ensure leading slash, strip trailing.
        # Root prefix "/" normalizes to "".
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a static file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return await next(request)
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        target = self._directory / relative if relative else self._directory
        file_path = await resolve(target)
        if file_path is None:
            return await next(request)
        if not file_path.is_relative_to(self._directory):
            return Response(body="Forbidden", status=403, content_type="text/plain; charset=utf-8")

        if await is_dir(file_path):
            index_path = file_path / self._index
            if not await is_file(index_path):
                return await next(request)
            if not path.endswith("/"):
                return Response(body="", status=301).with_header("Location", path + "/")
            file_path = index_path
        elif not await is_file(file_path):
            return await next(request)

        return await self._serve_file(file_path)

    async def _serve_file(self, file_path: Path) -> Response:
        body = await read_file(file_path)
        return Response(
            body=body,
            content_type=guess_content_type(file_path),
        ).with_header("Cache-Control", self._cache_control)
