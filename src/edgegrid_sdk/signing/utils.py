"""
Utility functions for request signing

This module provides utility functions for EG1-HMAC-SHA256 signing,
including nonce generation, timestamp formatting, header normalization
and content hash calculation.
"""

import time
import uuid
import hashlib
import base64
import re
from typing import Mapping, Optional

from ..exceptions import InvalidRequestError, SigningComputationError
from .types import DEFAULT_MAX_BODY, RequestBody


TIMESTAMP_FORMAT = '%Y%m%dT%H:%M:%S+0000'

_TIMESTAMP_PATTERN = re.compile(r'^\d{8}T\d{2}:\d{2}:\d{2}\+0000$')
_HEADER_NAME_PATTERN = re.compile(r'^[!#$%&\'*+\-.0-9A-Z^_`a-z|~]+$')
_WHITESPACE_RUN = re.compile(r'\s+')


def generate_nonce() -> str:
    """
    Generate a UUID v4 nonce for replay protection.

    Returns:
        str: UUID v4 string for use as nonce
    """
    return str(uuid.uuid4())


def generate_timestamp(timestamp: Optional[float] = None) -> str:
    """
    Format a UTC instant the way EG1 headers carry it.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Timestamp such as ``20240101T00:00:00+0000``
    """
    if timestamp is None:
        timestamp = time.time()

    return time.strftime(TIMESTAMP_FORMAT, time.gmtime(timestamp))


def validate_timestamp(timestamp: str) -> bool:
    """
    Validate EG1 timestamp format.

    Args:
        timestamp: Timestamp string to validate

    Returns:
        bool: True if timestamp matches ``YYYYMMDDThh:mm:ss+0000``
    """
    if not isinstance(timestamp, str):
        return False

    return bool(_TIMESTAMP_PATTERN.match(timestamp))


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.

    Args:
        name: Header name to normalize

    Returns:
        str: Lowercase header name
    """
    return name.lower().strip()


def validate_header_name(name: str) -> bool:
    """
    Validate header name for inclusion in signature.

    Args:
        name: Header name to validate

    Returns:
        bool: True if header name is a valid RFC 7230 token
    """
    if not isinstance(name, str):
        return False

    return bool(_HEADER_NAME_PATTERN.match(name))


def normalize_header_value(value) -> str:
    """Collapse internal whitespace runs to one space and trim."""
    return _WHITESPACE_RUN.sub(' ', str(value)).strip()


def format_body(body: RequestBody) -> bytes:
    """
    Convert a request body to the bytes covered by the content hash.

    Mappings are joined as ``key=value`` pairs with ``&`` in iteration order.

    Raises:
        InvalidRequestError: If the body type is not supported
    """
    if body is None:
        return b""

    if isinstance(body, Mapping):
        body = "&".join(f"{key}={value}" for key, value in body.items())

    if isinstance(body, str):
        return body.encode('utf-8')

    if isinstance(body, bytes):
        return body

    raise InvalidRequestError(
        f"Body must be string, bytes, mapping or None, got {type(body)}",
        {"body_type": str(type(body))}
    )


def calculate_content_hash(body: RequestBody, max_body: int = DEFAULT_MAX_BODY) -> str:
    """
    Calculate the base64 SHA-256 content hash of a request body.

    Args:
        body: Request body content
        max_body: Number of leading bytes covered by the hash

    Returns:
        str: Base64-encoded SHA-256 digest

    Raises:
        SigningComputationError: If the digest cannot be computed
    """
    content = format_body(body)[:max_body]

    try:
        digest = hashlib.sha256(content).digest()
    except (TypeError, ValueError) as e:
        raise SigningComputationError(
            f"Content hash calculation failed: {e}",
            {"original_error": str(e)}
        ) from e

    return base64.b64encode(digest).decode('ascii')
