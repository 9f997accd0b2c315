"""
http_message - Immutable HTTP message value objects

PSR-7 style requests, URIs, headers and body streams. Every value
object is immutable; modified copies are derived with ``with_*``
methods.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .exceptions import HTTPMessageError, InvalidArgumentError, ProtocolError, StreamError
from .interfaces import MessageInterface, RequestInterface, StreamInterface, UriInterface
from .headers import Headers
from .message import Message
from .request import Request
from .stream import Stream
from .uri import Uri
from .factory import (
    create_request,
    create_stream,
    create_stream_from_file,
    create_stream_from_resource,
    create_uri,
)
from .http11 import from_h11_request, to_h11_events, to_h11_request

__all__ = [
    "Request",
    "Uri",
    "Message",
    "Headers",
    "Stream",
    "RequestInterface",
    "MessageInterface",
    "UriInterface",
    "StreamInterface",
    "HTTPMessageError",
    "InvalidArgumentError",
    "ProtocolError",
    "StreamError",
    "create_request",
    "create_uri",
    "create_stream",
    "create_stream_from_file",
    "create_stream_from_resource",
    "to_h11_request",
    "to_h11_events",
    "from_h11_request",
]
