"""
HTTP/1.1 bridge for http_message.

This module converts ``Request`` objects to and from h11 events so
they can be handed to an h11 connection. Sending the resulting bytes
over a socket is left to the caller.
"""

import logging
from typing import List, Tuple, Union

import h11

from .exceptions import InvalidArgumentError, ProtocolError
from .request import Request

logger = logging.getLogger(__name__)

H11Headers = List[Tuple[bytes, bytes]]

# h11 speaks HTTP/1.x, and 1.1 is the only such version a Request carries
SUPPORTED_VERSIONS = ("1.1",)


def _encode_headers(request: Request) -> H11Headers:
    try:
        return [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in request.headers.items()
        ]
    except UnicodeEncodeError as e:
        raise ProtocolError("Header cannot be encoded as latin-1", cause=e) from e


def to_h11_request(request: Request) -> h11.Request:
    """
    Convert a request into an h11 Request event.

    A Host header is added from the URI when the request has none,
    since HTTP/1.1 requires one.

    Args:
        request: The request to convert

    Returns:
        h11 Request event

    Raises:
        ProtocolError: If the request cannot be expressed in HTTP/1.x
    """
    version = request.get_protocol_version()
    if version not in SUPPORTED_VERSIONS:
        raise ProtocolError(f"HTTP/{version} cannot be sent over an HTTP/1.x connection")

    if not request.has_header("Host") and request.get_uri().get_authority():
        host = request.get_uri().get_host()
        port = request.get_uri().get_port()
        request = request.with_header("Host", host if port is None else f"{host}:{port}")

    try:
        event = h11.Request(
            method=request.get_method().encode("ascii"),
            target=request.get_request_target().encode("ascii"),
            headers=_encode_headers(request),
            http_version=version.encode("ascii"),
        )
    except (h11.LocalProtocolError, UnicodeEncodeError) as e:
        raise ProtocolError(f"Invalid request {request!r}: {e}", cause=e) from e

    logger.debug(f"Converted {request!r} to h11 event")
    return event


def to_h11_events(request: Request) -> List[Union[h11.Request, h11.Data, h11.EndOfMessage]]:
    """
    Convert a request, including its body, into h11 events.

    A non-empty body is read from the start of the stream when it is
    seekable, and a Content-Length header is added unless framing
    headers are already present. A seekable body is left at the
    position it had before the call.

    Args:
        request: The request to convert

    Returns:
        List of h11 events: Request, optional Data and EndOfMessage
    """
    body = request.get_body()
    position = None
    if body.is_seekable():
        position = body.tell()
        body.rewind()
    data = body.get_contents() if body.is_readable() else b""
    if position is not None:
        body.seek(position)

    if (
        data
        and not request.has_header("Content-Length")
        and not request.has_header("Transfer-Encoding")
    ):
        request = request.with_header("Content-Length", len(data))

    events: List[Union[h11.Request, h11.Data, h11.EndOfMessage]] = [to_h11_request(request)]
    if data:
        events.append(h11.Data(data=data))
    events.append(h11.EndOfMessage())
    return events


def from_h11_request(event: h11.Request, scheme: str = "http", body: bytes = b"") -> Request:
    """
    Build a request from an h11 Request event.

    The URI is rebuilt from the Host header and the request target.
    Targets in asterisk-form or authority-form are kept as an explicit
    request target.

    Args:
        event: h11 Request event
        scheme: URI scheme to assume for origin-form targets
        body: Request body

    Returns:
        New Request instance

    Raises:
        InvalidArgumentError: If the method, version or URI is not supported
    """
    method = event.method.decode("ascii")
    target = event.target.decode("ascii")
    version = event.http_version.decode("ascii")
    headers = [(name.decode("latin-1"), value.decode("latin-1")) for name, value in event.headers]
    host = next((value for name, value in headers if name.lower() == "host"), "")

    explicit_target = False
    if target.startswith("/"):
        uri = f"{scheme}://{host}{target}" if host else target
    elif "://" in target:
        uri = target
    else:
        # asterisk-form (OPTIONS *) or authority-form (CONNECT host:port)
        authority = host if target == "*" else target
        uri = f"{scheme}://{authority}" if authority else ""
        explicit_target = True

    try:
        request = Request(method, uri, body, headers, version)
    except InvalidArgumentError:
        logger.debug(f"Rejected h11 request {method} {target} HTTP/{version}")
        raise

    if explicit_target:
        request = request.with_request_target(target)
    return request
