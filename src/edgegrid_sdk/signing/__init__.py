"""
EdgeGrid Python SDK - Request Signing Module

EG1-HMAC-SHA256 request signing: canonical request construction, signing key
derivation and Authorization header assembly.
"""

from .types import (
    AUTH_SCHEME,
    DEFAULT_MAX_BODY,
    Credentials,
    RequestDescriptor,
    SigningConfig,
    SigningContext,
)

from .eg1_signer import (
    EG1Signer,
    create_signer,
    sign_request,
    derive_signing_key,
    compute_signature,
    build_unsigned_preamble,
)

from .canonical_message import (
    CanonicalRequestBuilder,
    build_canonical_request,
)

from .signing_config import (
    SigningConfigBuilder,
    create_signing_config,
    validate_signing_config,
)

from .utils import (
    generate_nonce,
    generate_timestamp,
    validate_timestamp,
    calculate_content_hash,
    normalize_header_value,
)

from .integration import (
    EdgeGridAuth,
    EdgeGridSession,
    SigningSession,
    create_signing_session,
    sign_prepared_request,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'EG1Signer',
    'create_signer',
    'sign_request',
    'derive_signing_key',
    'compute_signature',
    'build_unsigned_preamble',
    'CanonicalRequestBuilder',
    'build_canonical_request',
    # Types
    'AUTH_SCHEME',
    'DEFAULT_MAX_BODY',
    'Credentials',
    'RequestDescriptor',
    'SigningConfig',
    'SigningContext',
    # Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    'validate_signing_config',
    # Utilities
    'generate_nonce',
    'generate_timestamp',
    'validate_timestamp',
    'calculate_content_hash',
    'normalize_header_value',
    # HTTP Integration
    'EdgeGridAuth',
    'EdgeGridSession',
    'SigningSession',
    'create_signing_session',
    'sign_prepared_request',
]
