"""Route, PathSegment, and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from finch.routing.params import Params


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal: ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, value="id")
    """

    value: str
    is_param: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition. One method, one pattern, one handler."""

    method: str
    pattern: str
    segments: tuple[PathSegment, ...]
    handler: Callable[..., Any]
    name: str | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.value for seg in self.segments if seg.is_param)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: Params
