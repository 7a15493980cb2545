"""
EdgeGrid Python SDK
EG1-HMAC-SHA256 request signing with .edgerc credentials
"""

from .version import __version__
from .exceptions import (
    EdgeGridSDKError,
    ErrorCodes,
    ConfigReadError,
    SectionNotFoundError,
    MissingCredentialError,
    SigningComputationError,
    InvalidRequestError,
    InvalidConfigError,
)
# Signing is imported before config; config.edgerc depends on signing.types
from .signing import (
    # Core signing functionality
    EG1Signer,
    create_signer,
    sign_request,
    # Types
    Credentials,
    RequestDescriptor,
    SigningConfig,
    SigningContext,
    # Configuration
    SigningConfigBuilder,
    create_signing_config,
    # HTTP Integration
    EdgeGridAuth,
    EdgeGridSession,
    SigningSession,
    create_signing_session,
    sign_prepared_request,
)
from .config import (
    CredentialStore,
    load_credentials,
    load_credentials_from_file,
    list_sections,
    resolve_edgerc_path,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'EdgeGridSDKError',
    'ErrorCodes',
    'ConfigReadError',
    'SectionNotFoundError',
    'MissingCredentialError',
    'SigningComputationError',
    'InvalidRequestError',
    'InvalidConfigError',
    # Request Signing - Core
    'EG1Signer',
    'create_signer',
    'sign_request',
    # Request Signing - Types
    'Credentials',
    'RequestDescriptor',
    'SigningConfig',
    'SigningContext',
    # Request Signing - Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    # Request Signing - HTTP Integration
    'EdgeGridAuth',
    'EdgeGridSession',
    'SigningSession',
    'create_signing_session',
    'sign_prepared_request',
    # Credentials
    'CredentialStore',
    'load_credentials',
    'load_credentials_from_file',
    'list_sections',
    'resolve_edgerc_path',
]
