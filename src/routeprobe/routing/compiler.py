"""Pattern compiler — one route declaration line to a ``RoutePattern``.

Recognized declarations::

    get /users/:id, to: 'users#show'
    post 'users' => 'users#create'
    match /search(/:page), to: 'search#index', via: :get
    get /files/*path, to: 'files#show'
    get /reports/:id(.:format), controller: 'reports', action: 'show'
    root 'pages#home'

The grammar is closed: the line is scanned as text and never evaluated.
"""

import re
from collections.abc import Callable
from types import MappingProxyType
from urllib.parse import unquote

from routeprobe.errors import RouteSyntaxError
from routeprobe.routing.segments import (
    ANY,
    Dynamic,
    Glob,
    Literal,
    Optional,
    RoutePattern,
    Segment,
)

VERBS: dict[str, str] = {
    "get": "GET",
    "post": "POST",
    "put": "PUT",
    "patch": "PATCH",
    "delete": "DELETE",
    "match": ANY,
    "root": "GET",
}

OPTION_KEYS = frozenset({"to", "via", "controller", "action", "as"})

_Fail = Callable[[str], RouteSyntaxError]

_NAME = re.compile(r"[A-Za-z_]\w*\Z")
_VERB = re.compile(r"([A-Za-z_]\w*)\s*")
_QUOTED = re.compile(r"""'([^']*)'|"([^"]*)\"""")
_BARE_PATH = re.compile(r"[^\s,]+")
_VALUE = r"""'(?P<sq>[^']*)'|"(?P<dq>[^"]*)"|:(?P<sym>\w+)|\[(?P<arr>[^\]]*)\]"""
_OPTION = re.compile(
    r"\s*(?:(?P<key>\w+):(?!:)|:(?P<rkey>\w+)\s*=>)\s*(?:" + _VALUE + r")\s*(?P<sep>,|\Z)"
)


def strip_comment(line: str) -> str:
    """Drop a trailing ``# comment`` that sits outside any quoted string."""
    quote: str | None = None
    for i, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "#" and (i == 0 or line[i - 1].isspace()):
            return line[:i]
    return line


def compile_line(line: str, lineno: int = 1) -> RoutePattern:
    """Compile a single declaration into a ``RoutePattern``.

    Raises ``RouteSyntaxError`` if the line does not match the grammar.
    """
    text = strip_comment(line).strip()

    def fail(detail: str) -> RouteSyntaxError:
        return RouteSyntaxError(detail, line=line, lineno=lineno)

    if not text:
        raise fail("empty declaration")

    m = _VERB.match(text)
    if m is None:
        raise fail("expected a route method")
    verb = m.group(1).lower()
    if verb not in VERBS:
        raise fail(f"unknown route method {m.group(1)!r}")
    rest = text[m.end() :]

    target: str | None = None
    if verb == "root":
        path = "/"
        target, rest = _take_quoted(rest)
        if target is not None:
            rest = _after_target(rest, fail)
    else:
        path, rest = _take_path(rest, fail)
        rest = rest.strip()
        if rest.startswith("=>"):
            target, rest = _take_quoted(rest[2:].lstrip())
            if target is None:
                raise fail("expected a quoted 'controller#action' after '=>'")
            rest = _after_target(rest, fail)
        elif rest.startswith(","):
            rest = rest[1:]
            if not rest.strip():
                raise fail("expected route options after ','")
        elif rest:
            raise fail("expected ',' or '=>' after path")

    options = _parse_options(rest, fail)
    if target is not None:
        if "to" in options:
            raise fail("target given twice")
        options["to"] = target

    method = VERBS[verb]
    if "via" in options:
        if verb != "match":
            raise fail("via: is only valid with match")
        method = _via_method(options["via"], fail)

    controller, action = "", ""
    if "to" in options:
        controller, sep, action = options["to"].partition("#")
        if not sep or not controller or not action or "#" in action:
            raise fail(f"expected 'controller#action', got {options['to']!r}")
    controller = options.get("controller", controller)
    action = options.get("action", action)

    try:
        segments = parse_path(path)
    except ValueError as exc:
        raise fail(str(exc)) from exc

    return RoutePattern(
        method=method,
        segments=segments,
        defaults=MappingProxyType({"controller": controller, "action": action}),
        path="/" + path.strip("/") if path.strip("/") else "/",
        line=lineno,
        name=options.get("as"),
    )


def parse_path(path: str) -> tuple[Segment, ...]:
    """Parse a path pattern into segments.

    Examples::

        "/"                     -> ()
        "/users/:id"            -> (Literal("users"), Dynamic("id"))
        "/files/*path"          -> (Literal("files"), Glob("path"))
        "/users/:id(.:format)"  -> (Literal("users"), Dynamic("id"),
                                    Optional(Dynamic("format"), "."))
        "/posts(/:page)"        -> (Literal("posts"), Optional(Dynamic("page"), "/"))

    Raises ``ValueError`` describing the first malformed component.
    """
    segments: list[Segment] = []
    i = 0
    while i < len(path):
        ch = path[i]
        if ch == "/":
            i += 1
            continue
        if ch == ")":
            msg = "unbalanced ')' in path"
            raise ValueError(msg)
        if ch == "(":
            end = path.find(")", i)
            if end == -1:
                msg = "unbalanced '(' in path"
                raise ValueError(msg)
            inner = path[i + 1 : end]
            if "(" in inner:
                msg = "nested optional segments are not supported"
                raise ValueError(msg)
            _append(segments, _optional(inner, segments))
            i = end + 1
            continue
        end = i
        while end < len(path) and path[end] not in "/()":
            end += 1
        _append(segments, _component(path[i:end]))
        i = end

    seen: set[str] = set()
    for seg in segments:
        target = seg.inner if isinstance(seg, Optional) else seg
        if isinstance(target, Dynamic | Glob):
            if target.name in seen:
                msg = f"duplicate segment name {target.name!r}"
                raise ValueError(msg)
            seen.add(target.name)
    return tuple(segments)


def _component(comp: str) -> Segment:
    if comp.startswith("*"):
        return Glob(_check_name(comp[1:]))
    return _single(comp)


def _single(comp: str) -> Literal | Dynamic:
    if comp.startswith(":"):
        return Dynamic(_check_name(comp[1:]))
    return Literal(unquote(comp))


def _optional(inner: str, segments: list[Segment]) -> Optional:
    if len(inner) < 2 or inner[0] not in "/.":
        msg = f"optional segment must look like '(/:name)' or '(.:name)', got '({inner})'"
        raise ValueError(msg)
    separator, body = inner[0], inner[1:]
    if "/" in body:
        msg = "optional segments may hold a single component"
        raise ValueError(msg)
    if body.startswith("*"):
        msg = "glob segments cannot be optional"
        raise ValueError(msg)
    if separator == "." and not segments:
        msg = "a '(.' suffix must follow a path component"
        raise ValueError(msg)
    return Optional(_single(body), separator)


def _append(segments: list[Segment], seg: Segment) -> None:
    if segments:
        last = segments[-1]
        if isinstance(last, Glob):
            msg = "glob segment must be the last segment"
            raise ValueError(msg)
        if isinstance(last, Optional) and last.separator == ".":
            msg = "a '(.' suffix must be the last segment"
            raise ValueError(msg)
    segments.append(seg)


def _check_name(name: str) -> str:
    if not _NAME.match(name):
        msg = f"invalid segment name {name!r}"
        raise ValueError(msg)
    return name


def _take_quoted(text: str) -> tuple[str | None, str]:
    m = _QUOTED.match(text)
    if m is None:
        return None, text
    value = m.group(1) if m.group(1) is not None else m.group(2)
    return value, text[m.end() :]


def _take_path(text: str, fail: _Fail) -> tuple[str, str]:
    if text[:1] in ("'", '"'):
        value, rest = _take_quoted(text)
        if value is None:
            raise fail("unterminated quoted path")
        return value, rest
    m = _BARE_PATH.match(text)
    if m is None:
        raise fail("missing path")
    return m.group(0), text[m.end() :]


def _after_target(rest: str, fail: _Fail) -> str:
    rest = rest.strip()
    if not rest:
        return ""
    if not rest.startswith(","):
        raise fail("expected ',' before route options")
    return rest[1:]


def _parse_options(text: str, fail: _Fail) -> dict[str, str]:
    options: dict[str, str] = {}
    if not text.strip():
        return options
    pos = 0
    while pos < len(text):
        m = _OPTION.match(text, pos)
        if m is None:
            raise fail(f"cannot parse route options {text[pos:].strip()!r}")
        key = m.group("key") or m.group("rkey")
        if key not in OPTION_KEYS:
            raise fail(f"unknown option {key!r}")
        if key in options:
            raise fail(f"option {key!r} given twice")
        if m.group("arr") is not None:
            options[key] = _single_from_array(m.group("arr"), key, fail)
        else:
            options[key] = next(
                v for v in (m.group("sq"), m.group("dq"), m.group("sym")) if v is not None
            )
        pos = m.end()
        if m.group("sep") == "," and not text[pos:].strip():
            raise fail("trailing ',' after route options")
    return options


def _single_from_array(body: str, key: str, fail: _Fail) -> str:
    items = [item.strip() for item in body.split(",") if item.strip()]
    if len(items) != 1:
        raise fail(f"{key}: with several values is not supported; declare one route per method")
    value, _ = _take_quoted(items[0])
    if value is not None:
        return value
    if items[0].startswith(":"):
        return items[0][1:]
    raise fail(f"cannot parse {key}: value {items[0]!r}")


def _via_method(value: str, fail: _Fail) -> str:
    name = value.lower()
    if name in ("all", "any"):
        return ANY
    if name not in VERBS or name in ("match", "root"):
        raise fail(f"unknown method {value!r} in via:")
    return VERBS[name]
