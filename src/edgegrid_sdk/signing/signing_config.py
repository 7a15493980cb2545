"""
Configuration management for request signing

This module provides the configuration builder and validation for
EG1-HMAC-SHA256 signing.
"""

from typing import List, Optional

from ..exceptions import InvalidConfigError
from .types import (
    SigningConfig,
    NonceGenerator,
    TimestampGenerator,
    DEFAULT_MAX_BODY,
)
from .utils import validate_header_name


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._headers_to_sign: List[str] = []
        self._max_body: int = DEFAULT_MAX_BODY
        self._nonce_generator: Optional[NonceGenerator] = None
        self._timestamp_generator: Optional[TimestampGenerator] = None

    def headers(self, headers: List[str]) -> 'SigningConfigBuilder':
        """
        Set the header names signed by default, replacing any already set.

        Args:
            headers: Header names in signing order

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._headers_to_sign = list(headers)
        return self

    def add_header(self, header: str) -> 'SigningConfigBuilder':
        """
        Append a header name to the default signed headers.

        Args:
            header: Header name

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        if header not in self._headers_to_sign:
            self._headers_to_sign.append(header)
        return self

    def max_body(self, max_body: int) -> 'SigningConfigBuilder':
        """
        Set the number of body bytes covered by the content hash.

        Args:
            max_body: Positive byte count

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._max_body = max_body
        return self

    def nonce_generator(self, generator: NonceGenerator) -> 'SigningConfigBuilder':
        """Set custom nonce generator."""
        self._nonce_generator = generator
        return self

    def timestamp_generator(self, generator: TimestampGenerator) -> 'SigningConfigBuilder':
        """Set custom timestamp generator."""
        self._timestamp_generator = generator
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Complete signing configuration

        Raises:
            InvalidConfigError: If configuration is invalid
        """
        config = SigningConfig(
            headers_to_sign=list(self._headers_to_sign),
            max_body=self._max_body,
            nonce_generator=self._nonce_generator,
            timestamp_generator=self._timestamp_generator
        )

        validate_signing_config(config)
        return config


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise InvalidConfigError(
            f"Expected SigningConfig, got {type(config)}",
            {"config_type": str(type(config))}
        )

    invalid = [name for name in config.headers_to_sign if not validate_header_name(name)]
    if invalid:
        raise InvalidConfigError(
            f"Invalid header names: {', '.join(map(str, invalid))}",
            {"invalid_headers": invalid}
        )

    if config.nonce_generator is not None and not callable(config.nonce_generator):
        raise InvalidConfigError("Nonce generator must be callable")

    if config.timestamp_generator is not None and not callable(config.timestamp_generator):
        raise InvalidConfigError("Timestamp generator must be callable")


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New builder instance
    """
    return SigningConfigBuilder()
