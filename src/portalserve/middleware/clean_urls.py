"""Clean URL middleware — serve ``/pages/accounts`` from ``accounts.html``.

Requests whose last path segment has no extension (and that do not end
in ``/``) are resolved against two candidate files, in order:

1. ``<root>/<path>.html``: the full request path, directories kept
2. ``<root>/pages/<basename>.html``: only the last segment

The first candidate that exists as a regular file is served as
``text/html``. When neither exists the request continues down the
pipeline untouched.

The decision is split in two: ``classify()`` is a pure function from a
request path to ``Bypass`` or ``Candidates``, and the middleware only
probes the filesystem for what ``classify()`` returned. Nothing is
cached; every request probes again.

Both ``/reports/monthly`` and ``/archive/monthly`` fall back to
``pages/monthly.html``. Deployed links rely on that, so it stays.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from portalserve._internal.files import is_file, read_file
from portalserve.http.request import Request
from portalserve.http.response import Response
from portalserve.middleware.protocol import Next

logger = logging.getLogger("portalserve.middleware")


@dataclass(frozen=True, slots=True)
class CleanURLConfig:
    """Resolver configuration. ``root`` is made absolute on creation."""

    root: Path
    pages_dir: str = "pages"
    suffix: str = ".html"
    content_type: str = "text/html; charset=utf-8"
    cache_control: str = "public, max-age=0"

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(os.path.abspath(self.root)))


@dataclass(frozen=True, slots=True)
class Bypass:
    """The path is a directory or a file with an extension; do nothing."""


@dataclass(frozen=True, slots=True)
class Candidates:
    """Files to probe, in priority order.

    ``primary`` is ``None`` when the request path climbs out of the root
    (``/../secret``); such a path is never probed.
    """

    primary: Path | None
    secondary: Path

    @property
    def paths(self) -> tuple[Path, ...]:
        if self.primary is None:
            return (self.secondary,)
        return (self.primary, self.secondary)


Resolution: TypeAlias = Bypass | Candidates

BYPASS = Bypass()


def has_extension(path: str) -> bool:
    """True if the last segment of *path* contains a dot."""
    return "." in path.rsplit("/", 1)[-1]


def classify(path: str, config: CleanURLConfig) -> Resolution:
    """Decide whether *path* is a clean page URL, without touching disk.

    Examples (root ``/srv/site``)::

        "/pages/"            -> Bypass()
        "/assets/app.css"    -> Bypass()
        "/dashboard"         -> Candidates(/srv/site/dashboard.html,
                                           /srv/site/pages/dashboard.html)
        "/reports/monthly"   -> Candidates(/srv/site/reports/monthly.html,
                                           /srv/site/pages/monthly.html)
    """
    if path.endswith("/") or has_extension(path):
        return BYPASS

    basename = path.rsplit("/", 1)[-1]
    joined = Path(os.path.normpath(config.root / f"{path.lstrip('/')}{config.suffix}"))
    primary = joined if joined.is_relative_to(config.root) else None
    secondary = config.root / config.pages_dir / f"{basename}{config.suffix}"
    return Candidates(primary=primary, secondary=secondary)


class CleanURLMiddleware:
    """Serve extensionless page URLs from their ``.html`` files.

    Usage::

        app.add_middleware(CleanURLMiddleware(CleanURLConfig(root=Path("./site"))))
    """

    __slots__ = ("config",)

    def __init__(self, config: CleanURLConfig) -> None:
        self.config = config

    async def resolve(self, path: str) -> Path | None:
        """Return the first existing candidate file for *path*, if any."""
        resolution = classify(path, self.config)
        if isinstance(resolution, Bypass):
            return None
        for candidate in resolution.paths:
            if await is_file(candidate):
                return candidate
        return None

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        page = await self.resolve(request.path)
        if page is None:
            return await next(request)

        logger.debug("%s -> %s", request.path, page)
        body = await read_file(page)
        return Response(body=body, content_type=self.config.content_type).with_header(
            "Cache-Control", self.config.cache_control
        )
