"""Routeprobe exception hierarchy.

Shared across the routing engine, the request pipeline, and the CLI so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RouteprobeError(Exception):
    """Base for all routeprobe-specific errors."""


class ConfigurationError(RouteprobeError):
    """Raised when app configuration is invalid."""


# -- Routing engine --


class RouteSyntaxError(RouteprobeError):
    """A single route declaration does not match the DSL grammar.

    Raised by the pattern compiler. The table builder wraps it in
    ``InvalidRoutesError`` before it reaches a caller.
    """

    def __init__(self, detail: str, *, line: str = "", lineno: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.line = line
        self.lineno = lineno


class InvalidRoutesError(RouteprobeError):
    """The routes table as a whole cannot be compiled.

    The message names the offending line number and its raw text so the
    user can correct the pasted table.
    """

    def __init__(self, message: str, *, lineno: int | None = None) -> None:
        super().__init__(message)
        self.lineno = lineno

    @classmethod
    def from_syntax_error(cls, exc: RouteSyntaxError) -> "InvalidRoutesError":
        """Wrap a compiler error with its line context."""
        message = f"line {exc.lineno}: {exc.detail}: {exc.line.strip()}"
        return cls(message, lineno=exc.lineno)


class NoMatchingRouteError(RouteprobeError):
    """The table compiled, but no pattern matches the method and URI."""

    def __init__(self, method: str, uri: str) -> None:
        super().__init__(f"No route matches {method} {uri!r}")
        self.method = method
        self.uri = uri


# -- HTTP --


@dataclass(frozen=True, slots=True)
class HTTPError(RouteprobeError):
    """An error that maps directly to an HTTP status code.

    Raised by the request pipeline. The ASGI handler catches these and
    turns them into a plain response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no site page matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the page exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the submitted body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
