"""
URI value object for http_message.

This module defines ``Uri``, an immutable representation of a URI
reference split into scheme, userinfo, host, port, path, query and
fragment. It can be parsed from a string and recomposed back into one.
"""

import re
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple
from urllib.parse import SplitResult, quote, urlsplit

from typing_extensions import Self

from .exceptions import InvalidArgumentError
from .interfaces import UriInterface


# Characters left unescaped in each component, on top of the
# unreserved set. "%" is kept so existing escapes are not encoded twice,
# bare ones are escaped by _quote.
_SUB_DELIMS = "!$&'()*+,;="
_USER_INFO_SAFE = _SUB_DELIMS + ":%"
_PATH_SAFE = _SUB_DELIMS + ":@/%"
_QUERY_SAFE = _PATH_SAFE + "?"

# A "%" that does not start an escape sequence
_BARE_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# Characters urlsplit would silently strip or split on
_FORBIDDEN_RE = re.compile(r"[\x00-\x20\x7f]")
# reg-name, IPv4 address or bracketed IP literal
_HOST_RE = re.compile(
    r"(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})*"
    r"|\[(?:[0-9A-Fa-f:.]+|v[0-9A-Fa-f]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+)\]"
)


@dataclass(frozen=True)
class Uri(UriInterface):
    """
    Immutable URI reference.

    Scheme and host are normalized to lower case. A port equal to the
    scheme's well-known port is stored as ``None``. The path is kept
    verbatim, so an absolute URI without a path recomposes without a
    trailing slash.
    """

    scheme: str = ""
    user_info: str = ""
    host: str = ""
    port: Optional[int] = None
    path: str = ""
    query: str = ""
    fragment: str = ""

    SUPPORTED_SCHEMES: ClassVar[Tuple[str, ...]] = ("http", "https", "")
    DEFAULT_PORTS: ClassVar[Dict[str, int]] = {"http": 80, "https": 443}

    def __post_init__(self) -> None:
        """Validate and normalize components after initialization."""
        for name in ("scheme", "user_info", "host", "path", "query", "fragment"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidArgumentError(
                    f"URI {name} must be a string, but {type(value).__name__} provided"
                )

        scheme = self.scheme.lower()
        if scheme not in self.SUPPORTED_SCHEMES:
            raise InvalidArgumentError(
                f"Unsupported URI scheme {self.scheme!r}, "
                f"expected one of {', '.join(s for s in self.SUPPORTED_SCHEMES if s)}"
            )

        port = self.port
        if port is not None:
            if isinstance(port, bool) or not isinstance(port, int):
                raise InvalidArgumentError(
                    f"URI port must be an integer, but {type(port).__name__} provided"
                )
            if not 1 <= port <= 65535:
                raise InvalidArgumentError(
                    f"URI port must be between 1 and 65535, but {port} provided"
                )
            if self.DEFAULT_PORTS.get(scheme) == port:
                port = None

        host = self.host.lower()
        if not _HOST_RE.fullmatch(host):
            raise InvalidArgumentError(f"Invalid URI host {self.host!r}")

        object.__setattr__(self, "scheme", scheme)
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "port", port)
        for name, safe in (
            ("user_info", _USER_INFO_SAFE),
            ("path", _PATH_SAFE),
            ("query", _QUERY_SAFE),
            ("fragment", _QUERY_SAFE),
        ):
            object.__setattr__(self, name, _quote(getattr(self, name), safe, name))

    @classmethod
    def from_string(cls, uri: str = "") -> "Uri":
        """
        Parse a URI reference into its components.

        Args:
            uri: Absolute or relative URI reference

        Returns:
            New Uri instance

        Raises:
            InvalidArgumentError: If the URI is not a string, contains
                whitespace or control characters, or has an unsupported
                scheme, an invalid host or an invalid port
        """
        if not isinstance(uri, str):
            raise InvalidArgumentError(
                f"URI must be a string, but {type(uri).__name__} provided"
            )
        if uri == "":
            return cls()
        if _FORBIDDEN_RE.search(uri):
            raise InvalidArgumentError(
                f"URI {uri!r} must not contain whitespace or control characters"
            )

        try:
            parts = urlsplit(uri)
            port = parts.port
        except ValueError as e:
            raise InvalidArgumentError(f"Unable to parse URI {uri!r}", cause=e) from e

        return cls(
            scheme=parts.scheme,
            user_info=_user_info(parts),
            host=_host(parts),
            port=port,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    def get_scheme(self) -> str:
        return self.scheme

    def get_authority(self) -> str:
        """
        Get the authority component, ``[user-info@]host[:port]``.

        Returns an empty string when no host is present.
        """
        if not self.host:
            return ""

        authority = self.host
        if self.user_info:
            authority = f"{self.user_info}@{authority}"
        if self.port is not None:
            authority = f"{authority}:{self.port}"
        return authority

    def get_user_info(self) -> str:
        return self.user_info

    def get_host(self) -> str:
        return self.host

    def get_port(self) -> Optional[int]:
        return self.port

    def get_path(self) -> str:
        return self.path

    def get_query(self) -> str:
        return self.query

    def get_fragment(self) -> str:
        return self.fragment

    def with_scheme(self, scheme: str) -> Self:
        return replace(self, scheme=scheme)

    def with_user_info(self, user: str, password: Optional[str] = None) -> Self:
        """Create a new URI with different user information."""
        for value in (user, "" if password is None else password):
            if not isinstance(value, str):
                raise InvalidArgumentError(
                    f"URI user info must be a string, but {type(value).__name__} provided"
                )

        user_info = _quote(user, _SUB_DELIMS + "%", "user info")
        if user_info and password:
            password = _quote(password, _USER_INFO_SAFE, "user info")
            user_info = f"{user_info}:{password}"
        return replace(self, user_info=user_info)

    def with_host(self, host: str) -> Self:
        return replace(self, host=host)

    def with_port(self, port: Optional[int]) -> Self:
        return replace(self, port=port)

    def with_path(self, path: str) -> Self:
        return replace(self, path=path)

    def with_query(self, query: str) -> Self:
        if isinstance(query, str):
            query = query[1:] if query.startswith("?") else query
        return replace(self, query=query)

    def with_fragment(self, fragment: str) -> Self:
        if isinstance(fragment, str):
            fragment = fragment[1:] if fragment.startswith("#") else fragment
        return replace(self, fragment=fragment)

    def __str__(self) -> str:
        uri = ""
        if self.scheme:
            uri += f"{self.scheme}:"

        authority = self.get_authority()
        if authority:
            uri += f"//{authority}"

        path = self.path
        if path:
            if authority and not path.startswith("/"):
                path = "/" + path
            elif not authority and path.startswith("//"):
                path = "/" + path.lstrip("/")
        uri += path

        if self.query:
            uri += f"?{self.query}"
        if self.fragment:
            uri += f"#{self.fragment}"
        return uri


def _user_info(parts: SplitResult) -> str:
    if parts.username is None:
        return ""
    if parts.password:
        return f"{parts.username}:{parts.password}"
    return parts.username


def _host(parts: SplitResult) -> str:
    host = parts.hostname or ""
    # IPv6 literals lose their brackets in urlsplit
    if ":" in host:
        host = f"[{host}]"
    return host



def _quote(value: str, safe: str, name: str) -> str:
    """Percent-encode a component, leaving valid escape sequences intact."""
    try:
        return quote(_BARE_PERCENT_RE.sub("%25", value), safe=safe)
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(
            f"URI {name} cannot be encoded as UTF-8", cause=e
        ) from e
