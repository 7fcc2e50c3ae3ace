"""Tests for routeprobe.http.query — URI splitting and QueryParams."""

from routeprobe.http.query import QueryParams, split_path, split_uri


class TestSplitUri:
    def test_no_query(self) -> None:
        path, query = split_uri("/users/5")
        assert path == "/users/5"
        assert dict(query) == {}

    def test_query(self) -> None:
        path, query = split_uri("/users/5?tab=posts&page=2")
        assert path == "/users/5"
        assert dict(query) == {"tab": "posts", "page": "2"}

    def test_splits_at_first_question_mark(self) -> None:
        path, query = split_uri("/search?q=a?b")
        assert path == "/search"
        assert query["q"] == "a?b"

    def test_values_are_decoded(self) -> None:
        _, query = split_uri("/s?q=hello%20world&name=bob+smith")
        assert query["q"] == "hello world"
        assert query["name"] == "bob smith"

    def test_duplicate_keys_last_wins(self) -> None:
        _, query = split_uri("/s?id=1&id=2&id=3")
        assert query["id"] == "3"
        assert query.get_list("id") == ["1", "2", "3"]

    def test_blank_values_kept(self) -> None:
        _, query = split_uri("/s?flag=&x=1")
        assert query["flag"] == ""

    def test_fragment_discarded(self) -> None:
        path, query = split_uri("/docs?page=2#intro")
        assert path == "/docs"
        assert dict(query) == {"page": "2"}

    def test_empty_query(self) -> None:
        path, query = split_uri("/a?")
        assert path == "/a"
        assert len(query) == 0


class TestSplitPath:
    def test_leading_and_trailing_slashes(self) -> None:
        assert split_path("/users/5") == ("users", "5")
        assert split_path("users/5/") == ("users", "5")

    def test_root(self) -> None:
        assert split_path("/") == ()
        assert split_path("") == ()

    def test_empty_components_dropped(self) -> None:
        assert split_path("//a///b") == ("a", "b")

    def test_percent_decoding(self) -> None:
        assert split_path("/users/caf%C3%A9") == ("users", "café")

    def test_encoded_slash_stays_in_component(self) -> None:
        assert split_path("/files/a%2Fb") == ("files", "a/b")


class TestQueryParams:
    def test_bytes_input(self) -> None:
        query = QueryParams(b"a=1")
        assert query["a"] == "1"

    def test_get_default(self) -> None:
        query = QueryParams("a=1")
        assert query.get("missing") is None
        assert query.get("missing", "x") == "x"

    def test_contains_and_len(self) -> None:
        query = QueryParams("a=1&b=2&a=3")
        assert "a" in query
        assert "c" not in query
        assert len(query) == 2

    def test_repr(self) -> None:
        assert repr(QueryParams("a=1")) == "QueryParams({'a': '1'})"
