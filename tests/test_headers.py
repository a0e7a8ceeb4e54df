"""
Tests for headers.py
Logic testing: Decision/Branch, Immutability coverage
"""
import pytest

from api_client.headers import HeaderMap, merge_headers


class TestHeaderMap:
    """Tests for HeaderMap."""

    def test_case_insensitive_lookup(self):
        headers = HeaderMap({"Content-Type": "application/json"})
        assert headers["content-type"] == "application/json"
        assert "CONTENT-TYPE" in headers

    # Decision: last write wins, no duplicates
    def test_set_overwrites_case_insensitively(self):
        headers = HeaderMap({"X-Token": "a"}).set("x-token", "b")
        assert len(headers) == 1
        assert headers["X-Token"] == "b"
        assert list(headers) == ["x-token"]

    # Path: order of first insertion kept
    def test_order_preserved(self):
        headers = HeaderMap([("A", "1"), ("B", "2")]).set("a", "3").set("C", "4")
        assert list(headers.items()) == [("a", "3"), ("B", "2"), ("C", "4")]

    # Immutability: set/remove return copies
    def test_set_returns_copy(self):
        original = HeaderMap({"A": "1"})
        original.set("B", "2")
        original.remove("A")
        assert original.to_dict() == {"A": "1"}

    def test_remove_case_insensitive(self):
        headers = HeaderMap({"Authorization": "x", "Accept": "y"}).remove("AUTHORIZATION")
        assert headers.to_dict() == {"Accept": "y"}

    # Boundary: removing a missing header is a no-op
    def test_remove_missing(self):
        assert HeaderMap({"A": "1"}).remove("B") == HeaderMap({"A": "1"})

    def test_values_stringified(self):
        assert HeaderMap({"X-Count": 3})["x-count"] == "3"

    def test_equality_ignores_case_of_names(self):
        assert HeaderMap({"Accept": "x"}) == HeaderMap({"accept": "x"})
        assert HeaderMap({"Accept": "x"}) == {"ACCEPT": "x"}

    def test_missing_key(self):
        with pytest.raises(KeyError):
            HeaderMap()["missing"]
        assert HeaderMap().get("missing", "default") == "default"


class TestMergeHeaders:
    """Tests for merge_headers."""

    # Decision: override wins on conflict regardless of case
    def test_override_wins(self):
        merged = merge_headers({"Accept": "text/plain", "X-A": "1"}, {"accept": "application/json"})
        assert merged["Accept"] == "application/json"
        assert merged["X-A"] == "1"
        assert len(merged) == 2

    def test_none_sides(self):
        assert merge_headers(None, None) == HeaderMap()
        assert merge_headers({"A": "1"}, None) == {"A": "1"}
        assert merge_headers(None, {"A": "1"}) == {"A": "1"}
