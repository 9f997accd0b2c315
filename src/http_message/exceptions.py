"""
Custom exceptions for http_message.

This module defines the exception hierarchy used throughout
the library for argument validation and stream handling.
"""

from typing import Optional


class HTTPMessageError(Exception):
    """Base exception for all http_message errors."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidArgumentError(HTTPMessageError, ValueError):
    """Raised when a method, version, URI component or header is rejected."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Invalid argument: {message}", cause)


class StreamError(HTTPMessageError):
    """Raised when there's an error with stream operations."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Stream error: {message}", cause)


class ProtocolError(HTTPMessageError):
    """Raised when a message cannot be expressed in the HTTP/1.x protocol."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)
