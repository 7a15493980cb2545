"""
Canonical request construction for EG1-HMAC-SHA256 signatures

The canonical request is seven tab-separated fields: method, scheme, host,
path, signed headers, content hash and the unsigned Authorization preamble.
A verifying server rebuilds the same string byte for byte.
"""

from typing import List

from .types import Credentials, RequestDescriptor, DEFAULT_MAX_BODY
from .utils import (
    calculate_content_hash,
    normalize_header_name,
    normalize_header_value,
)


SCHEME = 'https'
FIELD_SEPARATOR = '\t'


class CanonicalRequestBuilder:
    """
    Canonical request builder for EG1 signatures
    """

    def __init__(self, max_body: int = DEFAULT_MAX_BODY):
        """
        Initialize canonical request builder.

        Args:
            max_body: Number of body bytes covered by the content hash
        """
        self.max_body = max_body

    def build(
        self,
        descriptor: RequestDescriptor,
        credentials: Credentials,
        unsigned_preamble: str
    ) -> str:
        """
        Build the canonical request for signing.

        The host always comes from the credentials, never from the
        descriptor.

        Args:
            descriptor: Request being signed
            credentials: Credentials the request is signed with
            unsigned_preamble: Authorization header value without signature

        Returns:
            str: Tab-joined canonical request
        """
        fields = [
            descriptor.method.upper(),
            SCHEME,
            credentials.host,
            descriptor.path,
            self._build_header_block(descriptor),
            self._build_content_hash(descriptor),
            unsigned_preamble,
        ]

        return FIELD_SEPARATOR.join(fields)

    def _build_header_block(self, descriptor: RequestDescriptor) -> str:
        """
        Build the signed-header field.

        Headers named for signing but absent from the request are skipped.
        """
        lines: List[str] = []

        for header_name in descriptor.headers_to_sign:
            value = descriptor.header(header_name)
            if value is None:
                continue
            lines.append(f"{normalize_header_name(header_name)}:{normalize_header_value(value)}")

        return FIELD_SEPARATOR.join(lines)

    def _build_content_hash(self, descriptor: RequestDescriptor) -> str:
        # Only POST bodies are covered
        if descriptor.method.upper() != 'POST':
            return ''

        return calculate_content_hash(descriptor.body, self.max_body)


def build_canonical_request(
    descriptor: RequestDescriptor,
    credentials: Credentials,
    unsigned_preamble: str,
    max_body: int = DEFAULT_MAX_BODY
) -> str:
    """
    Build canonical request for signing.

    Args:
        descriptor: Request being signed
        credentials: Credentials the request is signed with
        unsigned_preamble: Authorization header value without signature
        max_body: Number of body bytes covered by the content hash

    Returns:
        str: Canonical request string
    """
    builder = CanonicalRequestBuilder(max_body)
    return builder.build(descriptor, credentials, unsigned_preamble)
