"""
Abstract message interfaces for http_message.

These contracts mirror the PSR-7 HTTP message interfaces. Every
``with_*`` method returns a new instance and leaves the receiver
untouched; implementations must be immutable apart from the state
held by the body stream.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from typing_extensions import Self


class StreamInterface(ABC):
    """
    Base interface for message bodies.

    A stream wraps a byte resource and exposes sequential and
    random access over it. Streams are stateful (cursor, open or
    closed) and are not synchronized.
    """

    @abstractmethod
    def __str__(self) -> str:
        """Read all data from the beginning of the stream as text."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the stream and the underlying resource."""
        pass

    @abstractmethod
    def detach(self) -> Optional[Any]:
        """Separate the underlying resource from the stream."""
        pass

    @abstractmethod
    def get_size(self) -> Optional[int]:
        """Get the size of the stream if known."""
        pass

    @abstractmethod
    def tell(self) -> int:
        """Return the current position of the read/write pointer."""
        pass

    @abstractmethod
    def eof(self) -> bool:
        """Return True if the stream is at the end."""
        pass

    @abstractmethod
    def is_seekable(self) -> bool:
        pass

    @abstractmethod
    def seek(self, offset: int, whence: int = 0) -> None:
        """Seek to a position in the stream."""
        pass

    @abstractmethod
    def rewind(self) -> None:
        """Seek to the beginning of the stream."""
        pass

    @abstractmethod
    def is_writable(self) -> bool:
        pass

    @abstractmethod
    def write(self, data: Union[bytes, str]) -> int:
        """Write data to the stream and return the number of bytes written."""
        pass

    @abstractmethod
    def is_readable(self) -> bool:
        pass

    @abstractmethod
    def read(self, length: int) -> bytes:
        """Read up to ``length`` bytes from the stream."""
        pass

    @abstractmethod
    def get_contents(self) -> bytes:
        """Return the remaining contents of the stream."""
        pass

    @abstractmethod
    def get_metadata(self, key: Optional[str] = None) -> Any:
        """Get stream metadata as a dict, or a single value by key."""
        pass


class UriInterface(ABC):
    """
    Value object representing a URI reference.

    Components are returned without their delimiters: the scheme
    has no trailing ``:``, the query no leading ``?`` and the
    fragment no leading ``#``.
    """

    @abstractmethod
    def get_scheme(self) -> str:
        pass

    @abstractmethod
    def get_authority(self) -> str:
        pass

    @abstractmethod
    def get_user_info(self) -> str:
        pass

    @abstractmethod
    def get_host(self) -> str:
        pass

    @abstractmethod
    def get_port(self) -> Optional[int]:
        pass

    @abstractmethod
    def get_path(self) -> str:
        pass

    @abstractmethod
    def get_query(self) -> str:
        pass

    @abstractmethod
    def get_fragment(self) -> str:
        pass

    @abstractmethod
    def with_scheme(self, scheme: str) -> Self:
        pass

    @abstractmethod
    def with_user_info(self, user: str, password: Optional[str] = None) -> Self:
        pass

    @abstractmethod
    def with_host(self, host: str) -> Self:
        pass

    @abstractmethod
    def with_port(self, port: Optional[int]) -> Self:
        pass

    @abstractmethod
    def with_path(self, path: str) -> Self:
        pass

    @abstractmethod
    def with_query(self, query: str) -> Self:
        pass

    @abstractmethod
    def with_fragment(self, fragment: str) -> Self:
        pass

    @abstractmethod
    def __str__(self) -> str:
        """Recompose the URI reference."""
        pass


class MessageInterface(ABC):
    """
    Protocol version, headers and body shared by requests and responses.

    Header names are case-insensitive.
    """

    @abstractmethod
    def get_protocol_version(self) -> str:
        pass

    @abstractmethod
    def with_protocol_version(self, version: str) -> Self:
        pass

    @abstractmethod
    def get_headers(self) -> Dict[str, List[str]]:
        pass

    @abstractmethod
    def has_header(self, name: str) -> bool:
        pass

    @abstractmethod
    def get_header(self, name: str) -> List[str]:
        pass

    @abstractmethod
    def get_header_line(self, name: str) -> str:
        pass

    @abstractmethod
    def with_header(self, name: str, value: Any) -> Self:
        pass

    @abstractmethod
    def with_added_header(self, name: str, value: Any) -> Self:
        pass

    @abstractmethod
    def without_header(self, name: str) -> Self:
        pass

    @abstractmethod
    def get_body(self) -> StreamInterface:
        pass

    @abstractmethod
    def with_body(self, body: StreamInterface) -> Self:
        pass


class RequestInterface(MessageInterface):
    """Representation of an outgoing, client-side request."""

    @abstractmethod
    def get_request_target(self) -> str:
        pass

    @abstractmethod
    def with_request_target(self, request_target: str) -> Self:
        pass

    @abstractmethod
    def get_method(self) -> str:
        pass

    @abstractmethod
    def with_method(self, method: str) -> Self:
        pass

    @abstractmethod
    def get_uri(self) -> UriInterface:
        pass

    @abstractmethod
    def with_uri(self, uri: UriInterface, preserve_host: bool = False) -> Self:
        pass
