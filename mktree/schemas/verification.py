"""
Schemas
File: verification.py

Purpose: Standard result format for proof verification.
Used by MerkleVerifier.check and the CLI to report outcomes without raising.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorCodes, MktreeException


class VerificationResult(BaseModel):
    """
    Outcome of verifying one block against a root.

    A mismatch is a normal failed result (code ROOT_MISMATCH). A proof
    that could not be decoded is reported with code MALFORMED_PROOF_PATH.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(
        ...,
        description="Whether the block is proven to be included under the root",
    )
    code: str | None = Field(
        default=None,
        description="Error code when verification did not pass",
    )
    message: str = Field(
        ...,
        description="Human-readable message describing the result",
    )
    expected_root: str | None = Field(
        default=None,
        description="Trusted root (0x-prefixed hex)",
    )
    computed_root: str | None = Field(
        default=None,
        description="Root reconstructed from the block and path (0x-prefixed hex)",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional details about the result",
    )

    @classmethod
    def passed(
        cls,
        expected_root: str,
        computed_root: str,
        message: str = "Block is included under the root",
    ) -> "VerificationResult":
        """Create a passed verification result."""
        return cls(
            ok=True,
            message=message,
            expected_root=expected_root,
            computed_root=computed_root,
        )

    @classmethod
    def mismatch(
        cls,
        expected_root: str,
        computed_root: str,
    ) -> "VerificationResult":
        """Create a failed result for a reconstructed root that does not match."""
        return cls(
            ok=False,
            code=ErrorCodes.ROOT_MISMATCH,
            message="Reconstructed root does not match the trusted root",
            expected_root=expected_root,
            computed_root=computed_root,
        )

    @classmethod
    def block_mismatch(
        cls,
        expected_root: str,
        proof_block_hash: str,
        block_hash: str,
    ) -> "VerificationResult":
        """Create a failed result for a proof issued for a different block."""
        return cls(
            ok=False,
            code=ErrorCodes.BLOCK_HASH_MISMATCH,
            message="Proof was issued for a different block",
            expected_root=expected_root,
            details={"proof_block_hash": proof_block_hash, "block_hash": block_hash},
        )

    @classmethod
    def from_exception(
        cls,
        exc: MktreeException,
        expected_root: str | None = None,
    ) -> "VerificationResult":
        """Create a failed result from a rejected input."""
        return cls(
            ok=False,
            code=exc.code,
            message=exc.message,
            expected_root=expected_root,
            details=dict(exc.details),
        )


__all__ = ["VerificationResult"]
