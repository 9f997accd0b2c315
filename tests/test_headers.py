"""
Unit tests for the Headers collection.

Tests case-insensitive lookup, multi-value support, validation and
immutable derivation.
"""

import pytest

from http_message.exceptions import InvalidArgumentError
from http_message.headers import Headers


class TestHeadersCreation:
    """Test creating header collections."""

    def test_from_mapping(self, sample_headers) -> None:
        """Test creating headers from a mapping."""
        headers = Headers(sample_headers)
        assert len(headers) == 4
        assert headers.get("content-type") == ["application/json"]
        assert headers.get("ACCEPT") == ["text/html", "application/json"]

    def test_from_pairs(self) -> None:
        """Test creating headers from (name, value) pairs."""
        headers = Headers([("X-Trace", "a"), ("x-trace", "b"), ("Host", "example.com")])
        assert headers.get("X-TRACE") == ["a", "b"]
        assert headers.as_dict() == {"X-Trace": ["a", "b"], "Host": ["example.com"]}

    def test_from_bytes(self) -> None:
        """Test creating headers from latin-1 bytes."""
        headers = Headers([(b"host", b"example.com")])
        assert headers.get("Host") == ["example.com"]

    def test_numbers_converted(self) -> None:
        """Test that numeric values are stored as strings."""
        headers = Headers({"test": 1234, "ratio": 0.5})
        assert headers.get("Test") == ["1234"]
        assert headers.get_line("ratio") == "0.5"

    def test_values_trimmed(self) -> None:
        """Test that surrounding whitespace is removed from values."""
        assert Headers({"X-Name": "  value\t"}).get("x-name") == ["value"]

    def test_empty(self) -> None:
        """Test creating an empty collection."""
        headers = Headers()
        assert len(headers) == 0
        assert headers.as_dict() == {}
        assert headers.get("missing") == []
        assert headers.get_line("missing") == ""


class TestHeadersValidation:
    """Test header validation."""

    @pytest.mark.parametrize("name", ["", "Bad Name", "Bad:Name", "Ünicode"])
    def test_invalid_name(self, name: str) -> None:
        """Test that names which are not tokens are rejected."""
        with pytest.raises(InvalidArgumentError):
            Headers({name: "value"})

    def test_non_string_name(self) -> None:
        """Test that a non-string name is rejected."""
        with pytest.raises(InvalidArgumentError, match="int"):
            Headers([(42, "value")])

    @pytest.mark.parametrize("value", ["a\r\nInjected: yes", "a\nb"])
    def test_line_break_in_value(self, value: str) -> None:
        """Test that values with line breaks are rejected."""
        with pytest.raises(InvalidArgumentError, match="line break"):
            Headers({"X-Test": value})

    @pytest.mark.parametrize("value", [None, True, {"a": "b"}, []])
    def test_invalid_value(self, value) -> None:
        """Test that unsupported value types are rejected."""
        with pytest.raises(InvalidArgumentError):
            Headers({"X-Test": value})


class TestHeadersDerivation:
    """Test the with/without methods of Headers."""

    def test_with_header_replaces(self) -> None:
        """Test that with_header replaces every value of a header."""
        original = Headers({"Host": "old.example.com", "Accept": "*/*"})
        modified = original.with_header("host", "new.example.com")
        assert modified.get("Host") == ["new.example.com"]
        assert modified.as_dict() == {"Accept": ["*/*"], "host": ["new.example.com"]}
        assert original.get("Host") == ["old.example.com"]

    def test_with_added_header(self) -> None:
        """Test that with_added_header appends values."""
        original = Headers({"Accept": "text/html"})
        modified = original.with_added_header("ACCEPT", ["application/json", "*/*"])
        assert modified.get("accept") == ["text/html", "application/json", "*/*"]
        assert modified.as_dict() == {"Accept": ["text/html", "application/json", "*/*"]}
        assert original.get("accept") == ["text/html"]

    def test_without_header(self) -> None:
        """Test removing a header."""
        original = Headers({"Accept": "text/html", "Host": "example.com"})
        modified = original.without_header("HOST")
        assert not modified.has("host")
        assert original.has("host")

    def test_without_missing_header(self) -> None:
        """Test that removing a missing header returns the same collection."""
        headers = Headers({"Accept": "text/html"})
        assert headers.without_header("Host") is headers

    def test_returned_lists_are_copies(self) -> None:
        """Test that mutating a returned list does not leak back."""
        headers = Headers({"Accept": "text/html"})
        headers.get("accept").append("evil")
        headers.as_dict()["Accept"].append("evil")
        assert headers.get("accept") == ["text/html"]


class TestHeadersProtocol:
    """Test container behavior of Headers."""

    def test_contains(self) -> None:
        """Test case-insensitive membership."""
        headers = Headers({"Content-Type": "text/plain"})
        assert "content-type" in headers
        assert b"CONTENT-TYPE" in headers
        assert "host" not in headers
        assert 42 not in headers

    def test_iteration_order(self) -> None:
        """Test that iteration yields original names in insertion order."""
        headers = Headers([("B", "1"), ("a", "2"), ("b", "3")])
        assert list(headers) == ["B", "a"]
        assert headers.items() == [("B", "1"), ("B", "3"), ("a", "2")]

    def test_equality(self) -> None:
        """Test that equality ignores name casing."""
        assert Headers({"Host": "example.com"}) == Headers({"host": "example.com"})
        assert Headers({"Host": "a"}) != Headers({"Host": "b"})
