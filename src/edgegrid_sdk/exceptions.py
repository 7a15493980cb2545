"""
Exception classes for EdgeGrid Python SDK
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Standard error codes for programmatic handling"""

    # Configuration errors
    CONFIG_READ_FAILED = "CONFIG_READ_FAILED"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Request errors
    INVALID_REQUEST = "INVALID_REQUEST"

    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"


class EdgeGridSDKError(Exception):
    """Base exception for all EdgeGrid SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.message} (code: {self.error_code})"


class ConfigReadError(EdgeGridSDKError):
    """Exception raised when the credentials configuration cannot be read"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.CONFIG_READ_FAILED, details)


class SectionNotFoundError(EdgeGridSDKError):
    """Exception raised when the requested section never matched during parsing"""

    def __init__(self, section: str):
        super().__init__(
            f"Section '{section}' not found in credentials configuration",
            ErrorCodes.SECTION_NOT_FOUND,
            {"section": section}
        )
        self.section = section


class MissingCredentialError(EdgeGridSDKError):
    """Exception raised when a required credential field is empty"""

    def __init__(self, field: str, section: Optional[str] = None):
        message = f"Missing {field} in credentials"
        if section is not None:
            message += f" for section '{section}'"
        super().__init__(
            message,
            ErrorCodes.MISSING_CREDENTIAL,
            {"field": field, "section": section}
        )
        self.field = field


class SigningComputationError(EdgeGridSDKError):
    """Exception raised when an underlying cryptographic primitive fails"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.SIGNING_FAILED, details)


class InvalidRequestError(EdgeGridSDKError):
    """Exception raised for request descriptors that cannot be canonicalized"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_REQUEST, details)


class InvalidConfigError(EdgeGridSDKError):
    """Exception raised for invalid signing configuration"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.INVALID_CONFIG, details)
