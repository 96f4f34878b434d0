"""Routing — method + pattern route table with literal-first matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""

from finch.routing.params import Params
from finch.routing.route import PathSegment, Route, RouteMatch
from finch.routing.router import Router, parse_pattern

__all__ = ["Params", "PathSegment", "Route", "RouteMatch", "Router", "parse_pattern"]
