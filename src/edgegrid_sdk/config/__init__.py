"""
Configuration management for EdgeGrid Python SDK

This module loads credential sets from .edgerc files.
"""

from .edgerc import (
    CredentialStore,
    DEFAULT_SECTION,
    EDGERC_ENV_VAR,
    load_credentials,
    load_credentials_from_file,
    list_sections,
    read_edgerc,
    resolve_edgerc_path,
)

__all__ = [
    'CredentialStore',
    'DEFAULT_SECTION',
    'EDGERC_ENV_VAR',
    'load_credentials',
    'load_credentials_from_file',
    'list_sections',
    'read_edgerc',
    'resolve_edgerc_path',
]
