"""Routing — explicit routes behind the file-serving middleware."""

from portalserve.routing.route import Route, RouteMatch
from portalserve.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
