"""
EG1-HMAC-SHA256 request signer

This module provides the signer that turns a request descriptor and a set of
credentials into an ``Authorization`` header value. Signing is a pure
function of its inputs, the wall clock and a fresh nonce; no state is kept
between calls.
"""

import base64
from dataclasses import replace
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import (
    InvalidConfigError,
    MissingCredentialError,
    SigningComputationError,
)
from .types import (
    AUTH_SCHEME,
    CREDENTIAL_FIELDS,
    Credentials,
    RequestDescriptor,
    SigningConfig,
    SigningContext,
)
from .utils import generate_nonce, generate_timestamp, validate_timestamp
from .canonical_message import CanonicalRequestBuilder
from .signing_config import validate_signing_config


def _hmac_sha256_base64(key: str, message: str) -> str:
    """
    Compute base64(HMAC-SHA256(key, message)) over UTF-8 encodings.

    Raises:
        SigningComputationError: If the HMAC primitive fails
    """
    try:
        mac = hmac.HMAC(key.encode('utf-8'), hashes.SHA256())
        mac.update(message.encode('utf-8'))
        digest = mac.finalize()
    except (TypeError, ValueError, UnsupportedAlgorithm) as e:
        raise SigningComputationError(
            f"HMAC-SHA256 computation failed: {e}",
            {"original_error": str(e)}
        ) from e

    return base64.b64encode(digest).decode('ascii')


def derive_signing_key(client_secret: str, timestamp: str) -> str:
    """
    Derive the per-request signing key.

    Args:
        client_secret: Long-lived client secret
        timestamp: Exact timestamp string placed in the header

    Returns:
        str: Base64 HMAC-SHA256 of the timestamp keyed by the secret
    """
    return _hmac_sha256_base64(client_secret, timestamp)


def compute_signature(signing_key: str, canonical_request: str) -> str:
    """
    Compute the request signature.

    Args:
        signing_key: Base64 key from derive_signing_key
        canonical_request: Canonical request string

    Returns:
        str: Base64 HMAC-SHA256 of the canonical request
    """
    return _hmac_sha256_base64(signing_key, canonical_request)


def build_unsigned_preamble(credentials: Credentials, timestamp: str, nonce: str) -> str:
    """Build the Authorization header value up to, not including, the signature."""
    return (
        f"{AUTH_SCHEME} client_token={credentials.client_token};"
        f"access_token={credentials.access_token};"
        f"timestamp={timestamp};"
        f"nonce={nonce};"
    )


def check_credentials(credentials: Credentials) -> None:
    """
    Ensure every credential field is non-empty.

    Raises:
        MissingCredentialError: Naming the first empty field
    """
    for field_name in CREDENTIAL_FIELDS:
        if not getattr(credentials, field_name, None):
            raise MissingCredentialError(field_name)


class EG1Signer:
    """
    EG1-HMAC-SHA256 request signer

    A signer holds only immutable configuration, so one instance can be shared
    across threads.
    """

    def __init__(self, config: Optional[SigningConfig] = None):
        """
        Initialize the signer with configuration.

        Args:
            config: Signing configuration (defaults apply if None)

        Raises:
            InvalidConfigError: If configuration is invalid
        """
        config = config or SigningConfig()
        validate_signing_config(config)
        self.config = replace(config, headers_to_sign=list(config.headers_to_sign))
        self._builder = CanonicalRequestBuilder(self.config.max_body)

    def sign(self, descriptor: RequestDescriptor, credentials: Credentials) -> str:
        """
        Sign a request and return the Authorization header value.

        Args:
            descriptor: Request to sign
            credentials: Credentials to sign with

        Returns:
            str: ``EG1-HMAC-SHA256 client_token=...;signature=...``

        Raises:
            MissingCredentialError: If a credential field is empty
            SigningComputationError: If the HMAC primitive fails
        """
        return self.sign_with_context(descriptor, credentials).authorization

    def sign_with_context(
        self,
        descriptor: RequestDescriptor,
        credentials: Credentials
    ) -> SigningContext:
        """
        Sign a request and return every intermediate value.

        Useful for comparing a canonical request against a server's.
        """
        check_credentials(credentials)

        timestamp = self._next_timestamp()
        nonce = self._next_nonce()

        if not descriptor.headers_to_sign and self.config.headers_to_sign:
            descriptor = replace(descriptor, headers_to_sign=self.config.headers_to_sign)

        preamble = build_unsigned_preamble(credentials, timestamp, nonce)
        signing_key = derive_signing_key(credentials.client_secret, timestamp)
        canonical_request = self._builder.build(descriptor, credentials, preamble)
        signature = compute_signature(signing_key, canonical_request)

        return SigningContext(
            timestamp=timestamp,
            nonce=nonce,
            signing_key=signing_key,
            canonical_request=canonical_request,
            signature=signature,
            authorization=f"{preamble}signature={signature}"
        )

    def _next_timestamp(self) -> str:
        timestamp_gen = self.config.timestamp_generator or generate_timestamp
        timestamp = timestamp_gen()

        if not validate_timestamp(timestamp):
            raise InvalidConfigError(
                f"Invalid timestamp: {timestamp}",
                {"timestamp": timestamp}
            )

        return timestamp

    def _next_nonce(self) -> str:
        nonce_gen = self.config.nonce_generator or generate_nonce
        nonce = nonce_gen()

        if not nonce or not isinstance(nonce, str):
            raise InvalidConfigError(
                f"Invalid nonce: {nonce!r}",
                {"nonce": nonce}
            )

        return nonce


def create_signer(config: Optional[SigningConfig] = None) -> EG1Signer:
    """
    Create a new EG1 signer.

    Args:
        config: Signing configuration

    Returns:
        EG1Signer: Configured signer instance
    """
    return EG1Signer(config)


def sign_request(
    descriptor: RequestDescriptor,
    credentials: Credentials,
    config: Optional[SigningConfig] = None
) -> str:
    """
    Sign a request with the given credentials.

    Args:
        descriptor: Request to sign
        credentials: Credentials to sign with
        config: Optional signing configuration

    Returns:
        str: Authorization header value
    """
    signer = create_signer(config)
    return signer.sign(descriptor, credentials)
