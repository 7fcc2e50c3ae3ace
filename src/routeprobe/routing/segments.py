"""Segment variants, RoutePattern, RouteTable and MatchOutcome.

Every type here is a frozen dataclass: compiled once per submitted
routes table, never mutated afterwards.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias, overload

# Methods a pattern may carry. ``ANY`` is produced by ``match`` without ``via:``.
HTTP_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
ANY = "ANY"


@dataclass(frozen=True, slots=True)
class Literal:
    """A path component matched verbatim (case-sensitive)."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Dynamic:
    """A single non-empty path component, captured under ``name``."""

    name: str

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, slots=True)
class Glob:
    """The remainder of the path, joined by ``/``. Always the last segment."""

    name: str

    def __str__(self) -> str:
        return f"*{self.name}"


@dataclass(frozen=True, slots=True)
class Optional:
    """Zero or one occurrence of ``inner``.

    ``separator`` is ``"/"`` for a whole optional component (``(/:page)``)
    or ``"."`` for a suffix split off the previous component
    (``(.:format)``).
    """

    inner: "Literal | Dynamic"
    separator: str = "/"

    def __str__(self) -> str:
        return f"({self.separator}{self.inner})"


Segment: TypeAlias = Literal | Dynamic | Glob | Optional


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """One compiled route declaration.

    ``segments`` is empty for the root path. ``defaults`` always carries
    ``controller`` and ``action`` (empty strings when undeclared).
    """

    method: str
    segments: tuple[Segment, ...]
    defaults: Mapping[str, str]
    path: str = "/"
    line: int = 0
    name: str | None = None

    def accepts(self, method: str) -> bool:
        """Whether a request with *method* (uppercase) may use this pattern.

        ``HEAD`` requests fall back to ``GET`` patterns.
        """
        if self.method in (ANY, method):
            return True
        return method == "HEAD" and self.method == "GET"

    def __str__(self) -> str:
        pattern = ""
        for seg in self.segments:
            if isinstance(seg, Optional):
                pattern += str(seg)
            else:
                pattern += f"/{seg}"
        target = f"{self.defaults.get('controller', '')}#{self.defaults.get('action', '')}"
        return f"{self.method} {pattern or '/'} -> {target}"


@dataclass(frozen=True, slots=True)
class RouteTable(Sequence[RoutePattern]):
    """An immutable, ordered list of compiled patterns.

    Order is significant: the matcher returns the first pattern that
    matches, regardless of specificity.
    """

    patterns: tuple[RoutePattern, ...] = ()

    @overload
    def __getitem__(self, index: int) -> RoutePattern: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[RoutePattern, ...]: ...

    def __getitem__(self, index: int | slice) -> RoutePattern | tuple[RoutePattern, ...]:
        return self.patterns[index]

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[RoutePattern]:
        return iter(self.patterns)


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """A request decomposed for matching.

    ``path`` holds decoded, non-empty path components.
    """

    method: str
    path: tuple[str, ...]
    query: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Matched:
    """Successful match: the winning pattern and its merged params."""

    pattern: RoutePattern
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class NoMatch:
    """No pattern in the table matched."""


NO_MATCH = NoMatch()

MatchOutcome: TypeAlias = Matched | NoMatch
