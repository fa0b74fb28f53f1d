"""
Schemas
File: errors.py

Purpose: Error taxonomy for mktree.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Expected outcomes (empty input, block not found, root mismatch) are
returned as values by the core and never raised. The exceptions below
cover caller-input and configuration faults only.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Hashing & configuration
    HASHER_CONFIGURATION_ERROR = "HASHER_CONFIGURATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Proof input
    MALFORMED_PROOF_PATH = "MALFORMED_PROOF_PATH"

    # Expected, non-exceptional outcomes (reported, never raised)
    EMPTY_INPUT = "EMPTY_INPUT"
    BLOCK_NOT_FOUND = "BLOCK_NOT_FOUND"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    BLOCK_HASH_MISMATCH = "BLOCK_HASH_MISMATCH"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MktreeError(BaseModel):
    """
    Error model for structured error reporting.

    Used to pass errors to callers (CLI output, verification results)
    without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_PROOF_PATH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MktreeException":
        """Convert this error model to a raised exception."""
        return MktreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MktreeException(Exception):
    """
    Base exception for all mktree errors.

    Carries structured error information and can be converted
    to a MktreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MKTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MktreeError:
        """Convert this exception to a MktreeError model."""
        return MktreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HasherConfigurationException(MktreeException):
    """Raised when the configured hash primitive cannot be used."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.HASHER_CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )


class MalformedProofPathException(MktreeException):
    """
    Raised when an encoded proof path cannot be decoded.

    Distinct from a verification mismatch: the path was rejected
    before any root reconstruction was attempted.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if offset is not None:
            full_details["offset"] = offset
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF_PATH,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(MktreeException):
    """Raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "MktreeError",
    "MktreeException",
    "HasherConfigurationException",
    "MalformedProofPathException",
    "ConfigurationException",
]
