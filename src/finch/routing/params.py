"""Path parameters bound by the router.

Values are always the raw path segment strings. Nothing is coerced
implicitly; handlers that need a number ask for one and decide what a
bad value means.
"""

from collections.abc import Iterator, Mapping


class Params(Mapping[str, str]):
    """Read-only mapping of parameter name to the matched segment.

    Usage::

        user_id = ctx.params.get("id")       # str | None
        user_id = ctx.params.require("id")   # str, KeyError if unbound
        number = ctx.params.get_int("id")    # int | None
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Params({self._data!r})"

    def require(self, name: str) -> str:
        """Return the value bound to *name*.

        Raises ``KeyError`` naming the parameter when the route has no
        such placeholder, which is a programming error in the handler.
        """
        try:
            return self._data[name]
        except KeyError:
            msg = f"Route has no path parameter {name!r}"
            raise KeyError(msg) from None

    def get_int(self, name: str) -> int | None:
        """Return the value as int, or ``None`` if missing or not numeric."""
        value = self._data.get(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
