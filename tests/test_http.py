"""Tests for the HTTP value types: Headers, Response, FormData."""

import json

import pytest

from routeprobe.http.forms import FormData, parse_form_data
from routeprobe.http.headers import Headers
from routeprobe.http.response import Response


def _h(*pairs: tuple[str, str]) -> Headers:
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            _h(("Accept", "*/*"))["X-Missing"]

    def test_contains_rejects_non_str(self) -> None:
        h = _h(("Accept", "*/*"))
        assert "ACCEPT" in h
        assert 42 not in h  # type: ignore[operator]

    def test_first_occurrence_wins(self) -> None:
        h = _h(("Accept", "text/html"), ("Accept", "application/json"))
        assert h["accept"] == "text/html"
        assert len(h) == 1

    def test_get_default(self) -> None:
        h = _h()
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"


class TestResponse:
    def test_defaults(self) -> None:
        r = Response("hi")
        assert r.status == 200
        assert r.content_type.startswith("text/html")
        assert r.body_bytes == b"hi"

    def test_json(self) -> None:
        r = Response.json({"id": "42"}, status=201)
        assert r.status == 201
        assert r.content_type == "application/json"
        assert json.loads(r.text) == {"id": "42"}

    def test_with_methods_return_new_instances(self) -> None:
        base = Response("x")
        changed = base.with_status(404).with_header("X-A", "1")
        assert base.status == 200
        assert base.headers == ()
        assert changed.status == 404
        assert changed.header("x-a") == "1"

    def test_header_missing(self) -> None:
        assert Response("x").header("Allow") is None

    def test_bytes_body_text(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"


class TestForms:
    def test_urlencoded(self) -> None:
        form = parse_form_data(
            b"route_method=get&route_uri=%2Fusers%2F42&routes_table_text=get+%2F",
            "application/x-www-form-urlencoded; charset=utf-8",
        )
        assert form["route_method"] == "get"
        assert form["route_uri"] == "/users/42"
        assert form["routes_table_text"] == "get /"

    def test_blank_values_kept(self) -> None:
        form = parse_form_data(b"route_uri=", "application/x-www-form-urlencoded")
        assert "route_uri" in form
        assert form["route_uri"] == ""

    def test_first_value_wins(self) -> None:
        form = FormData({"a": ["1", "2"]})
        assert form["a"] == "1"
        assert form.get("a") == "1"
        assert form.get("b", "x") == "x"

    def test_unsupported_content_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported form content type"):
            parse_form_data(b"{}", "application/json")
