"""
HTTP message base for http_message.

``Message`` groups the parts shared by every HTTP message: the
protocol version, the headers and the body. Requests compose a
Message rather than inheriting from it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, List, Tuple

from typing_extensions import Self

from .exceptions import InvalidArgumentError
from .headers import Headers
from .interfaces import MessageInterface, StreamInterface
from .stream import Stream


@dataclass(frozen=True)
class Message(MessageInterface):
    """
    Immutable protocol version, headers and body.

    The dataclass itself is frozen; the body stream is the only
    stateful part and is shared between derived messages.
    """

    protocol_version: str = "1.1"
    headers: Headers = field(default_factory=Headers)
    body: StreamInterface = field(default_factory=Stream.from_bytes)

    VALID_PROTOCOL_VERSIONS: ClassVar[Tuple[str, ...]] = ("1.1", "2.0", "3.0")

    def __post_init__(self) -> None:
        """Validate message data after initialization."""
        self.assert_protocol_version(self.protocol_version)

        if not isinstance(self.headers, Headers):
            raise InvalidArgumentError(
                f"headers must be a Headers instance, but {type(self.headers).__name__} provided"
            )

        if not isinstance(self.body, StreamInterface):
            raise InvalidArgumentError(
                f"body must implement StreamInterface, but {type(self.body).__name__} provided"
            )

    @classmethod
    def assert_protocol_version(cls, version: Any) -> None:
        """
        Check whether a protocol version number is supported.

        Raises:
            InvalidArgumentError: If the version is not supported
        """
        if version not in cls.VALID_PROTOCOL_VERSIONS:
            raise InvalidArgumentError(
                f"Unsupported HTTP protocol version number. {version!r} provided"
            )

    def get_protocol_version(self) -> str:
        return self.protocol_version

    def with_protocol_version(self, version: str) -> Self:
        return replace(self, protocol_version=version)

    def get_headers(self) -> Dict[str, List[str]]:
        return self.headers.as_dict()

    def has_header(self, name: str) -> bool:
        return self.headers.has(name)

    def get_header(self, name: str) -> List[str]:
        return self.headers.get(name)

    def get_header_line(self, name: str) -> str:
        return self.headers.get_line(name)

    def with_header(self, name: str, value: Any) -> Self:
        return replace(self, headers=self.headers.with_header(name, value))

    def with_added_header(self, name: str, value: Any) -> Self:
        return replace(self, headers=self.headers.with_added_header(name, value))

    def without_header(self, name: str) -> Self:
        return replace(self, headers=self.headers.without_header(name))

    def get_body(self) -> StreamInterface:
        return self.body

    def with_body(self, body: StreamInterface) -> Self:
        return replace(self, body=body)
