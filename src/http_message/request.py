"""
HTTP request for http_message.

This module defines ``Request``, an immutable representation of an
outgoing, client-side HTTP request. Once created a request cannot be
modified; every ``with_*`` method returns a new instance.
"""

import logging
import re
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from typing_extensions import Self

from .exceptions import InvalidArgumentError, StreamError
from .headers import Headers, RawHeaders
from .interfaces import RequestInterface, StreamInterface, UriInterface
from .message import Message
from .stream import Stream
from .uri import Uri

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s")


class Request(RequestInterface):
    """
    Immutable HTTP request representation.

    A request is made of a method, a target URI, an optional explicit
    request target and a ``Message`` holding the protocol version,
    headers and body.

    Example:
        >>> request = Request("post", "https://terryl.in/zh/?test=test")
        >>> request.get_method()
        'POST'
        >>> request.get_request_target()
        '/zh/?test=test'
    """

    # RFC 7231 request methods, plus PATCH (RFC 5789)
    VALID_METHODS: ClassVar[Tuple[str, ...]] = (
        "HEAD",
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "PATCH",
        "CONNECT",
        "OPTIONS",
        "TRACE",
    )

    _method: str
    _uri: UriInterface
    _request_target: Optional[str]
    _message: Message

    def __init__(
        self,
        method: str = "GET",
        uri: Union[str, UriInterface] = "",
        body: Union[str, bytes, StreamInterface] = "",
        headers: Optional[Union[Headers, RawHeaders]] = None,
        version: str = "1.1",
    ) -> None:
        """
        Initialize Request.

        Args:
            method: HTTP method, case-insensitive
            uri: URI string or UriInterface instance
            body: Request body, a string or a StreamInterface instance
            headers: Mapping or (name, value) pairs of request headers
            version: HTTP protocol version

        Raises:
            InvalidArgumentError: If the method or version is not supported,
                or the URI is neither a string nor a UriInterface
        """
        method = self.assert_method(method)
        Message.assert_protocol_version(version)

        if isinstance(uri, UriInterface):
            pass
        elif isinstance(uri, str):
            uri = Uri.from_string(uri)
        else:
            raise InvalidArgumentError(
                f"URI should be a string or an instance of UriInterface, "
                f"but {type(uri).__name__} provided"
            )

        if not isinstance(headers, Headers):
            headers = Headers(headers)

        message = Message(protocol_version=version, headers=headers, body=_to_stream(body))
        self._assign(method=method, uri=uri, request_target=None, message=message)

    def _assign(self, **fields: Any) -> None:
        for name, value in fields.items():
            object.__setattr__(self, f"_{name}", value)

    def _derive(self, **changes: Any) -> Self:
        """Copy every field into a new request, then apply ``changes``."""
        clone = object.__new__(type(self))
        fields: Dict[str, Any] = {
            "method": self._method,
            "uri": self._uri,
            "request_target": self._request_target,
            "message": self._message,
        }
        fields.update(changes)
        clone._assign(**fields)
        return clone

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, use the with_* methods")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<Request [{self._method} {self._uri}]>"

    @classmethod
    def assert_method(cls, method: Any) -> str:
        """
        Check whether a method is one of the supported request methods.

        Args:
            method: HTTP method, case-insensitive

        Returns:
            The upper-cased method

        Raises:
            InvalidArgumentError: If the method is not supported
        """
        if not isinstance(method, str):
            raise InvalidArgumentError(
                f"HTTP method must be a string, but {type(method).__name__} provided"
            )

        candidate = method.upper()
        if candidate not in cls.VALID_METHODS:
            raise InvalidArgumentError(
                f"Unsupported HTTP method. It must be compatible with RFC-7231 "
                f"request method, but {method!r} provided"
            )
        return candidate

    def get_request_target(self) -> str:
        """
        Get the request target, as sent on the request line.

        Returns the target set with ``with_request_target`` if any,
        otherwise the URI path (``/`` when empty) followed by the query.
        """
        if self._request_target:
            return self._request_target

        target = self._uri.get_path() or "/"
        query = self._uri.get_query()
        if query:
            target += f"?{query}"
        return target

    def with_request_target(self, request_target: str) -> Self:
        """
        Create a new request with an explicit request target.

        Raises:
            InvalidArgumentError: If the target is not a string or
                contains whitespace
        """
        if not isinstance(request_target, str):
            raise InvalidArgumentError("A request target must be a string")

        if _WHITESPACE_RE.search(request_target):
            raise InvalidArgumentError("A request target cannot contain any whitespace")

        return self._derive(request_target=request_target)

    def get_method(self) -> str:
        return self._method

    def with_method(self, method: str) -> Self:
        """Create a new request with a different method."""
        return self._derive(method=self.assert_method(method))

    def get_uri(self) -> UriInterface:
        return self._uri

    def with_uri(self, uri: UriInterface, preserve_host: bool = False) -> Self:
        """
        Create a new request with a different URI.

        The Host header is replaced with the URI's host. With
        ``preserve_host`` the swap only happens when the request has
        no Host header yet. When the new URI has no host, or the Host
        header must be preserved, this request is returned unchanged.

        Args:
            uri: The new URI
            preserve_host: Keep the existing Host header

        Returns:
            New request, or this request when nothing changes
        """
        if not isinstance(uri, UriInterface):
            raise InvalidArgumentError(
                f"URI should be an instance of UriInterface, but {type(uri).__name__} provided"
            )

        host = uri.get_host()

        if (not preserve_host and host) or (
            preserve_host and not self.has_header("Host") and host
        ):
            logger.debug(f"Replacing URI with {uri}, Host header set to {host}")
            return self._derive(uri=uri, message=self._message.with_header("Host", host))

        logger.debug(f"URI {uri} ignored, Host header preserved")
        return self

    # Message delegation

    def get_protocol_version(self) -> str:
        return self._message.get_protocol_version()

    def with_protocol_version(self, version: str) -> Self:
        return self._derive(message=self._message.with_protocol_version(version))

    def get_headers(self) -> Dict[str, List[str]]:
        return self._message.get_headers()

    def has_header(self, name: str) -> bool:
        return self._message.has_header(name)

    def get_header(self, name: str) -> List[str]:
        return self._message.get_header(name)

    def get_header_line(self, name: str) -> str:
        return self._message.get_header_line(name)

    def with_header(self, name: str, value: Any) -> Self:
        return self._derive(message=self._message.with_header(name, value))

    def with_added_header(self, name: str, value: Any) -> Self:
        return self._derive(message=self._message.with_added_header(name, value))

    def without_header(self, name: str) -> Self:
        return self._derive(message=self._message.without_header(name))

    def get_body(self) -> StreamInterface:
        return self._message.get_body()

    def with_body(self, body: StreamInterface) -> Self:
        return self._derive(message=self._message.with_body(body))

    @property
    def method(self) -> str:
        """Get the request method."""
        return self._method

    @property
    def uri(self) -> UriInterface:
        """Get the request URI."""
        return self._uri

    @property
    def protocol_version(self) -> str:
        """Get the protocol version."""
        return self._message.protocol_version

    @property
    def headers(self) -> Headers:
        """Get the header collection."""
        return self._message.headers

    @property
    def body(self) -> StreamInterface:
        """Get the request body."""
        return self._message.body

    @property
    def message(self) -> Message:
        """Get the underlying message."""
        return self._message


def _to_stream(body: Any) -> StreamInterface:
    """
    Turn a request body into a stream.

    Streams are used as-is; strings and bytes are written into a new
    in-memory buffer rewound to offset 0. Other types are ignored and
    leave the body empty.

    Raises:
        InvalidArgumentError: If a string body cannot be encoded
    """
    if isinstance(body, StreamInterface):
        return body

    if isinstance(body, (str, bytes)):
        try:
            return Stream.from_bytes(body)
        except StreamError as e:
            raise InvalidArgumentError("Request body cannot be encoded as UTF-8", cause=e) from e

    logger.debug(f"Ignoring request body of type {type(body).__name__}")
    return Stream.from_bytes()
