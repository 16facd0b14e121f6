"""
Shared error handling for the Passport token service.
"""

from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class PassportException(Exception):
    """Base exception for Passport services."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigError(PassportException):
    """Unresolvable algorithm or key configuration."""

    def __init__(self, message: str = "Signer configuration is invalid", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIG_ERROR", message, details)


class EncodeError(PassportException):
    """Token signing pipeline failure. The underlying cause is never exposed."""

    def __init__(self, message: str = "Token encoding failed"):
        super().__init__("ENCODE_ERROR", message)


class ParseError(PassportException):
    """Malformed token string.

    The offending token is kept on ``token`` for server-side logging only; it
    is not part of the message or the response details.
    """

    def __init__(self, message: str = "Token could not be parsed", token: Optional[str] = None):
        self.token = token
        super().__init__("PARSE_ERROR", message)


class ValidationReason(str, Enum):
    """Reason codes for rejected claims."""
    EXPIRED = "expired"
    NOT_YET_VALID = "not-yet-valid"
    ISSUER_MISMATCH = "issuer-mismatch"
    AUDIENCE_MISMATCH = "audience-mismatch"
    SUBJECT_MISMATCH = "subject-mismatch"
    ID_MISMATCH = "id-mismatch"


class ValidationError(PassportException):
    """Claim mismatch or out-of-window time."""

    def __init__(self, reason: ValidationReason, message: Optional[str] = None):
        self.reason = reason
        super().__init__(
            "VALIDATION_ERROR",
            message or f"Token validation failed: {reason.value}",
            {"reason": reason.value}
        )


class SignatureError(PassportException):
    """Signature verification could not be carried out."""

    def __init__(self, message: str = "Token signature could not be verified", details: Optional[Dict[str, Any]] = None):
        super().__init__("SIGNATURE_ERROR", message, details)


class CryptoError(PassportException):
    """Payload encryption key or ciphertext errors."""

    def __init__(self, message: str = "Token payload could not be decoded"):
        super().__init__("CRYPTO_ERROR", message)


class RevocationError(PassportException):
    """Revocation store backend failure.

    Callers must fail closed: a token whose revocation state cannot be read
    is not verifiably non-revoked.
    """

    def __init__(self, message: str = "Revocation store unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("REVOCATION_ERROR", message, details)
