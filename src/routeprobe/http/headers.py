"""Case-insensitive request headers built from raw ASGI byte pairs."""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    Names are lower-cased and decoded once at construction; the first
    occurrence of a repeated header wins on lookup.
    """

    __slots__ = ("_items",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        items: dict[str, str] = {}
        for name, value in raw:
            items.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        object.__setattr__(self, "_items", items)

    def __getitem__(self, key: str) -> str:
        return self._items[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Headers({self._items!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        return self._items.get(key.lower(), default)
