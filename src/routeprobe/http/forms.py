"""Form data parsing.

Only ``application/x-www-form-urlencoded`` bodies are accepted: the
recognizer form has three text fields and no uploads.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key.

    Usage::

        form = await request.form()
        routes = form.get("routes_table_text", "")
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]]) -> None:
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Raises:
        ValueError: If content type is not URL-encoded form data.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
        return FormData(parsed)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)
