"""Compiled router with exact path matching.

The server's explicit routes are few and fixed (the root redirect), so
paths are matched literally after normalizing slashes. Everything else
is the job of the file-serving middleware in front of the router.
"""

from portalserve.errors import MethodNotAllowed, NotFound
from portalserve.routing.route import Route, RouteMatch


def normalize_path(path: str) -> str:
    """Collapse empty segments: ``"//a//b/"`` -> ``"/a/b"``, ``""`` -> ``"/"``."""
    parts = [p for p in path.split("/") if p]
    return "/" + "/".join(parts)


class Router:
    """Compiled router.

    Usage::

        router = Router()
        router.add(Route("/", handler, frozenset({"GET", "HEAD"})))
        router.compile()
        match = router.match("GET", "/")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        # normalized path -> method -> route
        self._table: dict[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        by_method = self._table.setdefault(normalize_path(route.path), {})
        for method in route.methods:
            by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, each once, in registration order."""
        seen: set[int] = set()
        result: list[Route] = []
        for by_method in self._table.values():
            for route in by_method.values():
                if id(route) not in seen:
                    seen.add(id(route))
                    result.append(route)
        return result

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        by_method = self._table.get(normalize_path(path))
        if not by_method:
            raise NotFound(f"No route matches {method} {path!r}")

        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))

        return RouteMatch(route=route, path_params={})
