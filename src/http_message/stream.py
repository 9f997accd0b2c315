"""
Stream implementation for http_message.

This module wraps a binary file object (an in-memory buffer, an
open file, a temporary file) behind ``StreamInterface`` so it can be
used as a message body.
"""

import io
import logging
from typing import Any, BinaryIO, Dict, Optional, Union

from .exceptions import InvalidArgumentError, StreamError
from .interfaces import StreamInterface

logger = logging.getLogger(__name__)


class Stream(StreamInterface):
    """
    Byte stream over a binary file object.

    The stream owns the resource: ``close()`` closes it and
    ``detach()`` hands it back to the caller, after which the stream
    is unusable. Access is not synchronized.
    """

    READ_CHUNK_SIZE = 65536  # 64KB

    def __init__(self, resource: BinaryIO) -> None:
        """
        Initialize Stream.

        Args:
            resource: A binary file object supporting at least read or write

        Raises:
            InvalidArgumentError: If resource is not a binary file object
        """
        if isinstance(resource, io.TextIOBase) or not (
            hasattr(resource, "read") or hasattr(resource, "write")
        ):
            raise InvalidArgumentError(
                f"Stream resource must be a binary file object, "
                f"but {type(resource).__name__} provided"
            )

        self._resource: Optional[BinaryIO] = resource

    @classmethod
    def from_bytes(cls, data: Union[bytes, str] = b"") -> "Stream":
        """
        Create a read/write in-memory stream positioned at offset 0.

        Args:
            data: Initial contents, strings are encoded as UTF-8

        Returns:
            New Stream instance
        """
        stream = cls(io.BytesIO())
        if data:
            stream.write(data)
            stream.rewind()
        return stream

    def _unavailable(self) -> bool:
        return self._resource is None or getattr(self._resource, "closed", False)

    def _require_resource(self) -> BinaryIO:
        if self._resource is None:
            raise StreamError("Stream is detached")
        if getattr(self._resource, "closed", False):
            raise StreamError("Stream is closed")
        return self._resource

    def __str__(self) -> str:
        """Read the whole stream from the beginning and decode it as UTF-8."""
        if self._unavailable() or not self.is_readable():
            return ""

        if self.is_seekable():
            self.rewind()
        return self.get_contents().decode("utf-8", errors="replace")

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the stream and the underlying resource."""
        if self._resource is not None:
            self._resource.close()
            logger.debug("Stream closed")
        self._resource = None

    def detach(self) -> Optional[BinaryIO]:
        """
        Separate the underlying resource from the stream.

        Returns:
            The resource, or None if already detached
        """
        resource = self._resource
        self._resource = None
        if resource is not None:
            logger.debug("Stream detached")
        return resource

    def get_size(self) -> Optional[int]:
        """Get the size of the stream in bytes, None if unknown."""
        if self._unavailable():
            return None

        try:
            position = self._resource.tell()
            size = self._resource.seek(0, io.SEEK_END)
            self._resource.seek(position)
            return size
        except (OSError, ValueError):
            return None

    def tell(self) -> int:
        resource = self._require_resource()
        try:
            return resource.tell()
        except OSError as e:
            raise StreamError("Unable to determine stream position", cause=e) from e

    def eof(self) -> bool:
        """Return True when the pointer is at or past the end of the stream."""
        if self._unavailable():
            return True

        size = self.get_size()
        if size is None:
            return False
        return self.tell() >= size

    def is_seekable(self) -> bool:
        if self._unavailable():
            return False
        return _supports(self._resource, "seekable")

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> None:
        resource = self._require_resource()
        if not self.is_seekable():
            raise StreamError("Stream is not seekable")

        try:
            resource.seek(offset, whence)
        except (OSError, ValueError) as e:
            raise StreamError(
                f"Unable to seek to stream position {offset} with whence {whence}",
                cause=e,
            ) from e

    def rewind(self) -> None:
        self.seek(0)

    def is_writable(self) -> bool:
        if self._unavailable():
            return False
        return _supports(self._resource, "writable")

    def write(self, data: Union[bytes, str]) -> int:
        """
        Write data to the stream.

        Args:
            data: Bytes to write, strings are encoded as UTF-8

        Returns:
            Number of bytes written

        Raises:
            StreamError: If the stream is not writable or the data cannot
                be encoded or written
        """
        resource = self._require_resource()
        if not self.is_writable():
            raise StreamError("Cannot write to a non-writable stream")

        if isinstance(data, str):
            try:
                data = data.encode("utf-8")
            except UnicodeEncodeError as e:
                raise StreamError("Unable to encode data as UTF-8", cause=e) from e

        try:
            return resource.write(data)
        except (OSError, ValueError) as e:
            raise StreamError("Unable to write to stream", cause=e) from e

    def is_readable(self) -> bool:
        if self._unavailable():
            return False
        return _supports(self._resource, "readable")

    def read(self, length: int) -> bytes:
        """
        Read up to ``length`` bytes from the current position.

        Args:
            length: Maximum number of bytes to read

        Returns:
            The bytes read, empty at end of stream
        """
        resource = self._require_resource()
        if not self.is_readable():
            raise StreamError("Cannot read from a non-readable stream")
        if length < 0:
            raise StreamError(f"Length to read must be non-negative, but {length} provided")

        try:
            return resource.read(length)
        except (OSError, ValueError) as e:
            raise StreamError("Unable to read from stream", cause=e) from e

    def get_contents(self) -> bytes:
        """Read the remainder of the stream."""
        resource = self._require_resource()
        if not self.is_readable():
            raise StreamError("Cannot read from a non-readable stream")

        chunks = []
        while True:
            try:
                chunk = resource.read(self.READ_CHUNK_SIZE)
            except (OSError, ValueError) as e:
                raise StreamError("Unable to read stream contents", cause=e) from e
            if not chunk:
                break
            chunks.append(chunk)

        return b"".join(chunks)

    def get_metadata(self, key: Optional[str] = None) -> Any:
        """
        Get metadata describing the underlying resource.

        Args:
            key: Optional single entry to return

        Returns:
            Dict of metadata, the value for ``key`` (None if missing), or
            None when the stream is detached
        """
        if self._resource is None:
            return {} if key is None else None

        metadata: Dict[str, Any] = {
            "mode": getattr(self._resource, "mode", None),
            "name": getattr(self._resource, "name", None),
            "closed": getattr(self._resource, "closed", False),
            "seekable": self.is_seekable(),
            "readable": self.is_readable(),
            "writable": self.is_writable(),
        }

        if key is None:
            return metadata
        return metadata.get(key)

    @property
    def detached(self) -> bool:
        """Get whether the resource has been detached or closed."""
        return self._resource is None


def _supports(resource: BinaryIO, capability: str) -> bool:
    """Ask a file object whether it is readable, writable or seekable."""
    check = getattr(resource, capability, None)
    if check is None:
        return False
    try:
        return bool(check())
    except (OSError, ValueError):
        return False
