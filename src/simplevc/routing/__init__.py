"""Routing — named route collections compiled into a trie matcher.

Routes are collected into a ``RouteCollection`` (in code or in a routes
file) and compiled into an immutable ``Router`` when the app is built.
"""

from simplevc.routing.collection import RouteCollection
from simplevc.routing.context import RequestContext
from simplevc.routing.loader import load_routes
from simplevc.routing.route import Route, RouteMatch
from simplevc.routing.router import Router

__all__ = ["RequestContext", "Route", "RouteCollection", "RouteMatch", "Router", "load_routes"]
