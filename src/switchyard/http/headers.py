"""Immutable, case-insensitive request headers.

Implements ``Mapping[str, str]``. Names are lower-cased once at
construction; repeated headers keep every value in arrival order.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first value for a name.
    ``get_list`` returns all values (e.g. repeated ``X-Forwarded-For``).

    Accepts a plain mapping or an iterable of ``(name, value)`` pairs::

        Headers({"Content-Type": "application/json"})
        Headers([("accept", "text/html"), ("accept", "application/json")])
    """

    __slots__ = ("_items",)

    def __init__(self, headers: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        items = tuple((name.lower(), value) for name, value in pairs)
        object.__setattr__(self, "_items", items)

    @classmethod
    def from_asgi(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        """Decode raw ASGI header byte pairs (latin-1, as ASGI requires)."""
        return cls([(name.decode("latin-1"), value.decode("latin-1")) for name, value in raw])

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._items:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._items))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._items))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, in arrival order."""
        wanted = key.lower()
        return [value for name, value in self._items if name == wanted]
