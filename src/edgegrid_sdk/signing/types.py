"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the EG1-HMAC-SHA256
request signing scheme.
"""

from typing import Dict, List, Mapping, Optional, Union, Callable
from dataclasses import dataclass, field

from ..exceptions import InvalidRequestError, InvalidConfigError


AUTH_SCHEME = "EG1-HMAC-SHA256"

# Bodies longer than this are truncated before hashing
DEFAULT_MAX_BODY = 8192

# Credential fields in the order they are validated at sign time
CREDENTIAL_FIELDS = ('host', 'client_token', 'access_token', 'client_secret')


@dataclass(frozen=True)
class Credentials:
    """
    Credential set loaded from one section of an .edgerc file

    Attributes:
        host: API host the requests are signed against
        client_token: Client token sent in the Authorization header
        access_token: Access token sent in the Authorization header
        client_secret: Shared secret used to derive the signing key
    """
    host: str = ""
    client_token: str = ""
    access_token: str = ""
    client_secret: str = ""

    def __repr__(self) -> str:
        return (
            f"Credentials(host={self.host!r}, client_token={self.client_token!r}, "
            f"access_token={self.access_token!r}, client_secret='***')"
        )


@dataclass
class RequestDescriptor:
    """
    Outgoing request to be signed

    Attributes:
        method: HTTP method (GET, POST, etc.)
        path: Request path including any query string
        host: Host the request will connect to
        headers_to_sign: Header names to include in the signature, in order
        headers: Header values already set on the request
        body: Optional body (string, bytes or key/value mapping)
    """
    method: str
    path: str
    host: Optional[str] = None
    headers_to_sign: List[str] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes, Mapping[str, object]]] = None

    def __post_init__(self):
        """Validate request after initialization"""
        if not self.method:
            raise InvalidRequestError("Request method cannot be empty")

        if not self.path:
            raise InvalidRequestError("Request path cannot be empty")

        if not self.path.startswith('/'):
            raise InvalidRequestError(
                f"Request path must start with '/': {self.path}",
                {"path": self.path}
            )

        if not isinstance(self.headers, Mapping):
            raise InvalidRequestError("Headers must be a mapping")

        if self.body is not None and not isinstance(self.body, (str, bytes, Mapping)):
            raise InvalidRequestError(
                f"Body must be string, bytes, mapping or None, got {type(self.body)}",
                {"body_type": str(type(self.body))}
            )

        # Header lookups are case-insensitive
        self.headers = {k.lower(): v for k, v in self.headers.items()}
        self.headers_to_sign = list(self.headers_to_sign)

    def header(self, name: str) -> Optional[str]:
        """Return the value of a header set on the request, if any."""
        return self.headers.get(name.lower())


@dataclass
class SigningConfig:
    """
    Configuration for request signing

    Attributes:
        headers_to_sign: Default header names to sign when a request names none
        max_body: Number of body bytes covered by the content hash
        nonce_generator: Optional custom nonce generator function
        timestamp_generator: Optional custom timestamp generator function
    """
    headers_to_sign: List[str] = field(default_factory=list)
    max_body: int = DEFAULT_MAX_BODY
    nonce_generator: Optional[Callable[[], str]] = None
    timestamp_generator: Optional[Callable[[], str]] = None

    def __post_init__(self):
        """Validate signing configuration"""
        if isinstance(self.max_body, bool) or not isinstance(self.max_body, int) or self.max_body <= 0:
            raise InvalidConfigError(
                f"max_body must be a positive integer, got {self.max_body!r}",
                {"max_body": self.max_body}
            )

        if isinstance(self.headers_to_sign, str):
            raise InvalidConfigError("headers_to_sign must be a list of header names")

        self.headers_to_sign = list(self.headers_to_sign)


@dataclass
class SigningContext:
    """
    Per-call signing state, discarded once the header is produced

    Attributes:
        timestamp: Timestamp placed in the header and used to derive the key
        nonce: Fresh nonce for this request
        signing_key: Base64 key derived from the client secret and timestamp
        canonical_request: Tab-joined string the signature covers
        signature: Base64 signature over the canonical request
        authorization: Complete Authorization header value
    """
    timestamp: str
    nonce: str
    signing_key: str
    canonical_request: str
    signature: str
    authorization: str


# Type aliases for convenience
NonceGenerator = Callable[[], str]
TimestampGenerator = Callable[[], str]
RequestBody = Union[str, bytes, Mapping[str, object], None]
