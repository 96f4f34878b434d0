"""Compiled router with trie-based path matching.

One trie per HTTP method. Each node has literal children keyed by
segment text and at most one parameter child. Matching walks literal
edges before the parameter edge and backtracks, so a literal segment
always beats a parameter at the same position regardless of the order
routes were registered in.
"""

from collections.abc import Callable
from typing import Any

from finch.errors import ConfigurationError, NotFound, RouteConflict
from finch.routing.params import Params
from finch.routing.route import PathSegment, Route, RouteMatch

PARAM_SENTINEL = ":"


def split_path(path: str) -> list[str]:
    """Split a request path or pattern into segments.

    The leading and trailing slash are ignored, so ``/`` has no segments
    and ``/users/`` matches like ``/users``.
    """
    stripped = path.strip("/")
    return stripped.split("/") if stripped else []


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Examples::

        "/"                 -> ()
        "/users"            -> (PathSegment("users"),)
        "/users/:id"        -> (PathSegment("users"), PathSegment("id", is_param=True))
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(pattern):
        if (part.startswith("{") and part.endswith("}")) or (
            part.startswith("<") and part.endswith(">")
        ):
            msg = (
                f"Route pattern {pattern!r} uses {part!r}. "
                f"Finch expects :param segments, e.g. '/users/:id'."
            )
            raise ConfigurationError(msg)
        if not part.startswith(PARAM_SENTINEL):
            segments.append(PathSegment(part))
            continue
        name = part[len(PARAM_SENTINEL) :]
        if not name:
            msg = f"Route pattern {pattern!r} has a parameter with no name."
            raise ConfigurationError(msg)
        if name in seen:
            msg = f"Route pattern {pattern!r} binds parameter {name!r} twice."
            raise ConfigurationError(msg)
        seen.add(name)
        segments.append(PathSegment(name, is_param=True))
    return tuple(segments)


class _TrieNode:
    """A node in one method's route trie. Mutable until compile()."""

    __slots__ = ("children", "param_child", "route")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.param_child: _TrieNode | None = None
        self.route: Route | None = None


class Router:
    """Route table keyed by method, with literal-first matching.

    Usage::

        router = Router()
        router.add("GET", "/users/:id", show_user)
        router.compile()
        match = router.match("GET", "/users/42")
        match.params["id"]  # "42"
    """

    __slots__ = ("_compiled", "_roots")

    def __init__(self) -> None:
        self._roots: dict[str, _TrieNode] = {}
        self._compiled = False

    def add(
        self,
        method: str,
        pattern: str,
        handler: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* + *pattern*.

        Raises ``RouteConflict`` if the same method already has this
        pattern, or a pattern of the same shape with different parameter
        names (``/users/:id`` vs ``/users/:name``).
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        method = method.upper()
        route = Route(
            method=method,
            pattern=pattern,
            segments=parse_pattern(pattern),
            handler=handler,
            name=name,
        )

        node = self._roots.setdefault(method, _TrieNode())
        for seg in route.segments:
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _TrieNode()
                node = node.param_child
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        if node.route is not None:
            existing = node.route
            if existing.pattern == pattern:
                msg = f"Route {method} {pattern!r} is already registered."
            else:
                msg = (
                    f"Route {method} {pattern!r} is ambiguous with "
                    f"{existing.pattern!r}: they differ only in parameter names."
                )
            raise RouteConflict(msg)

        node.route = route
        return route

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method."""
        result: list[Route] = []
        for root in self._roots.values():
            self._collect(root, result)
        return result

    def _collect(self, node: _TrieNode, result: list[Route]) -> None:
        if node.route is not None:
            result.append(node.route)
        for child in node.children.values():
            self._collect(child, result)
        if node.param_child is not None:
            self._collect(node.param_child, result)

    def match(self, method: str, path: str) -> RouteMatch:
        """Resolve *method* + *path* to a route and its bound parameters.

        Raises ``NotFound`` if no route for this method matches.
        """
        root = self._roots.get(method.upper())
        parts = split_path(path)
        route = self._match_node(root, parts, 0) if root is not None else None
        if route is None:
            raise NotFound(f"No route matches {method} {path!r}")

        bound = {
            seg.value: part
            for seg, part in zip(route.segments, parts, strict=True)
            if seg.is_param
        }
        return RouteMatch(route=route, params=Params(bound))

    def _match_node(self, node: _TrieNode, parts: list[str], index: int) -> Route | None:
        if index == len(parts):
            return node.route

        part = parts[index]

        # 1. Literal edge
        child = node.children.get(part)
        if child is not None:
            route = self._match_node(child, parts, index + 1)
            if route is not None:
                return route

        # 2. Parameter edge — never binds an empty segment
        if node.param_child is not None and part:
            return self._match_node(node.param_child, parts, index + 1)

        return None
