"""
Case-insensitive HTTP header collection for http_message.

``Headers`` stores each header as a list of string values keyed by
its lower-cased name, and remembers the spelling a name was first
given with. Like every other value object in this package it is
immutable: the ``with_*`` methods return new collections.
"""

import re
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from .exceptions import InvalidArgumentError


HeaderValue = Union[str, int, float, bytes, Iterable[Union[str, int, float, bytes]]]
RawHeaders = Union[Mapping[Any, Any], Iterable[Tuple[Any, Any]]]

# RFC 7230 section 3.2.6
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Headers:
    """
    Immutable, case-insensitive HTTP headers with multi-value support.

    Example:
        >>> headers = Headers({"Content-Type": "text/html", "Accept": ["a", "b"]})
        >>> headers.get("content-type")
        ['text/html']
        >>> headers.get_line("ACCEPT")
        'a, b'
    """

    __slots__ = ("_names", "_values")

    def __init__(self, raw: Optional[RawHeaders] = None) -> None:
        """
        Initialize Headers.

        Args:
            raw: Mapping of name to value(s), or iterable of (name, value) pairs.
                Names that differ only in case are combined.
        """
        self._names: Dict[str, str] = {}
        self._values: Dict[str, List[str]] = {}

        if raw is None:
            return

        items = raw.items() if isinstance(raw, Mapping) else raw
        for name, value in items:
            name = _normalize_name(name)
            key = name.lower()
            self._names.setdefault(key, name)
            self._values.setdefault(key, []).extend(_normalize_values(value))

    def _copy(self) -> "Headers":
        clone = Headers()
        clone._names = dict(self._names)
        clone._values = {key: list(values) for key, values in self._values.items()}
        return clone

    def get(self, name: str) -> List[str]:
        """Get all values of a header, empty list if missing."""
        return list(self._values.get(_lower(name), []))

    def get_line(self, name: str) -> str:
        """Get a header's values joined by a comma, empty string if missing."""
        return ", ".join(self._values.get(_lower(name), []))

    def has(self, name: str) -> bool:
        return _lower(name) in self._values

    def as_dict(self) -> Dict[str, List[str]]:
        """Get all headers keyed by their original spelling."""
        return {self._names[key]: list(values) for key, values in self._values.items()}

    def items(self) -> List[Tuple[str, str]]:
        """Get one (name, value) pair per header value, in insertion order."""
        return [
            (self._names[key], value)
            for key, values in self._values.items()
            for value in values
        ]

    def with_header(self, name: str, value: HeaderValue) -> "Headers":
        """Create new headers with ``name`` replaced by ``value``."""
        name = _normalize_name(name)
        values = _normalize_values(value)

        clone = self._copy()
        key = name.lower()
        clone._names.pop(key, None)
        clone._values.pop(key, None)
        clone._names[key] = name
        clone._values[key] = values
        return clone

    def with_added_header(self, name: str, value: HeaderValue) -> "Headers":
        """Create new headers with ``value`` appended to ``name``."""
        name = _normalize_name(name)
        values = _normalize_values(value)

        clone = self._copy()
        key = name.lower()
        clone._names.setdefault(key, name)
        clone._values.setdefault(key, []).extend(values)
        return clone

    def without_header(self, name: str) -> "Headers":
        """Create new headers without ``name``."""
        key = _lower(name)
        if key not in self._values:
            return self

        clone = self._copy()
        del clone._names[key]
        del clone._values[key]
        return clone

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, bytes)) and self.has(name)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Headers({self.as_dict()!r})"


def _lower(name: Union[str, bytes]) -> str:
    if isinstance(name, bytes):
        name = name.decode("latin-1")
    return name.lower()


def _normalize_name(name: Any) -> str:
    if isinstance(name, bytes):
        name = name.decode("latin-1")
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"Header name must be a string, but {type(name).__name__} provided"
        )
    if not _TOKEN_RE.match(name):
        raise InvalidArgumentError(f"Header name {name!r} is not a valid token")
    return name


def _normalize_value(value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"Header value must be a string or number, but {type(value).__name__} provided"
        )
    if "\r" in value or "\n" in value:
        raise InvalidArgumentError(f"Header value {value!r} contains a line break")
    return value.strip(" \t")


def _normalize_values(value: Any) -> List[str]:
    if isinstance(value, (str, bytes, int, float)):
        return [_normalize_value(value)]
    if isinstance(value, (list, tuple)):
        if not value:
            raise InvalidArgumentError("Header value list must not be empty")
        return [_normalize_value(item) for item in value]
    raise InvalidArgumentError(
        f"Header value must be a string, number or list, but {type(value).__name__} provided"
    )
