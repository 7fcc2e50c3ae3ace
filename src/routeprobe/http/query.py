"""Query string parameters and request URI splitting.

``QueryParams`` is a ``Mapping[str, str]`` that keeps every value of a
repeated key.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs, unquote


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.

    ``__getitem__`` returns the *last* value for a key, so duplicate keys
    collapse to their final occurrence. ``get_list`` returns all values.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, query_string: str | bytes = "") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        parsed = parse_qs(query_string, keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][-1]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the last value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[-1]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


def split_uri(raw_uri: str) -> tuple[str, QueryParams]:
    """Split a raw request URI into its path and query parameters.

    Splits at the first ``?``; a ``#fragment`` is discarded. A URI with no
    ``?`` yields empty query parameters::

        split_uri("/users/5?tab=posts")  -> ("/users/5", {"tab": "posts"})
    """
    uri = raw_uri.strip().split("#", 1)[0]
    path, _, query_string = uri.partition("?")
    return path, QueryParams(query_string)


def split_path(path: str) -> tuple[str, ...]:
    """Split a path into decoded, non-empty components.

    ``/users/5`` and ``users/5/`` both yield ``("users", "5")``.
    """
    return tuple(unquote(part) for part in path.split("/") if part)
