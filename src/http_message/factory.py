"""
Factory functions for http_message.

Shortcuts for building requests, URIs and streams from plain values,
in the spirit of the PSR-17 HTTP factories.
"""

from typing import BinaryIO, Union

from .exceptions import InvalidArgumentError, StreamError
from .interfaces import UriInterface
from .request import Request
from .stream import Stream
from .uri import Uri

_VALID_FILE_MODES = frozenset(
    mode + suffix
    for mode in ("r", "r+", "w", "w+", "a", "a+", "x", "x+")
    for suffix in ("", "b")
)


def create_request(method: str, uri: Union[str, UriInterface]) -> Request:
    """
    Create a request with an empty body and no headers.

    Args:
        method: HTTP method
        uri: URI string or UriInterface instance

    Returns:
        New Request instance
    """
    return Request(method, uri)


def create_uri(uri: str = "") -> Uri:
    """
    Create a URI from a string.

    Args:
        uri: URI reference to parse

    Returns:
        New Uri instance
    """
    return Uri.from_string(uri)


def create_stream(content: Union[str, bytes] = "") -> Stream:
    """
    Create an in-memory stream positioned at its beginning.

    Args:
        content: Initial contents, strings are encoded as UTF-8

    Returns:
        New Stream instance
    """
    return Stream.from_bytes(content)


def create_stream_from_file(filename: str, mode: str = "rb") -> Stream:
    """
    Create a stream over a file.

    The file is always opened in binary mode.

    Args:
        filename: Path of the file to open
        mode: One of the ``open()`` modes r, r+, w, w+, a, a+, x, x+

    Returns:
        New Stream instance

    Raises:
        InvalidArgumentError: If the mode is not supported
        StreamError: If the file cannot be opened
    """
    if mode not in _VALID_FILE_MODES:
        raise InvalidArgumentError(f"Unsupported file mode {mode!r}")

    if "b" not in mode:
        mode += "b"

    try:
        resource = open(filename, mode)
    except OSError as e:
        raise StreamError(f"Unable to open {filename!r} with mode {mode!r}", cause=e) from e

    return Stream(resource)


def create_stream_from_resource(resource: BinaryIO) -> Stream:
    """
    Create a stream over an already open binary file object.

    Args:
        resource: Binary file object

    Returns:
        New Stream instance
    """
    return Stream(resource)
