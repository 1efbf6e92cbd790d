"""Read-only, case-insensitive request headers.

Built once from the raw ASGI byte pairs. Names are folded to lower case
and values decoded as latin-1, the HTTP/1.1 wire charset.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive view over request headers.

    ``headers["X-Request-Id"]`` returns the first value sent;
    ``get_list`` returns every value in arrival order.
    """

    __slots__ = ("_raw", "_values")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        self._raw = raw
        self._values = values

    def __getitem__(self, key: str) -> str:
        try:
            return self._values[key.lower()][0]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({dict((k, v[0]) for k, v in self._values.items())!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values sent for *key*, possibly empty."""
        return list(self._values.get(key.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw ASGI header pairs, as received."""
        return self._raw
