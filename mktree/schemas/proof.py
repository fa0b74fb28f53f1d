"""
Schemas
File: proof.py

Purpose: JSON transport model for a single inclusion proof.

An InclusionProof carries everything a verifier needs besides the block
itself: the hash algorithm, the claimed root, and the proof path. Digests
are 0x-prefixed hex strings. The proof tree is never serialized.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mktree.crypto.hashing import from_hex, to_hex
from mktree.merkle.proof_path import Direction, ProofPath, ProofStep
from .errors import MalformedProofPathException


SideName = Literal["left", "right"]

_SIDE_TO_DIRECTION: dict[str, Direction] = {
    "left": Direction.SIBLING_IS_LEFT,
    "right": Direction.SIBLING_IS_RIGHT,
}


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """One proof step: the sibling's side and digest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    side: SideName = Field(..., description="Side the sibling digest occupies")
    sibling: str = Field(..., description="Sibling digest (0x-prefixed hex)")

    @field_validator("sibling")
    @classmethod
    def _validate_sibling(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_step(cls, step: ProofStep) -> "ProofStepModel":
        side = "left" if step.direction == Direction.SIBLING_IS_LEFT else "right"
        return cls(side=side, sibling=to_hex(step.sibling_digest))

    def to_step(self) -> ProofStep:
        return ProofStep(_SIDE_TO_DIRECTION[self.side], from_hex(self.sibling))


class InclusionProof(BaseModel):
    """
    Inclusion proof for one block, ready for JSON transport.

    The root here is the prover's claim; verifiers compare against a
    root they obtained independently whenever they have one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: str = Field(..., description="hashlib name of the hash primitive", min_length=1)
    root: str = Field(..., description="Claimed Merkle root (0x-prefixed hex)")
    block_hash: str = Field(..., description="hash_one(block) of the proven block (0x-prefixed hex)")
    steps: list[ProofStepModel] = Field(
        default_factory=list,
        description="Proof path in leaf-to-root order",
    )

    @field_validator("algorithm")
    @classmethod
    def _normalize_algorithm(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("root", "block_hash")
    @classmethod
    def _validate_digest(cls, v: str) -> str:
        return _check_hex(v)

    @property
    def digest_size(self) -> int:
        return len(from_hex(self.root))

    @classmethod
    def from_path(
        cls,
        algorithm: str,
        root: bytes,
        block_hash: bytes,
        path: ProofPath,
    ) -> "InclusionProof":
        """Build the transport model from a proof path."""
        return cls(
            algorithm=algorithm,
            root=to_hex(root),
            block_hash=to_hex(block_hash),
            steps=[ProofStepModel.from_step(step) for step in path],
        )

    @classmethod
    def parse(cls, data: str | bytes) -> "InclusionProof":
        """
        Parse a JSON document.

        Raises:
            MalformedProofPathException: If the document is not a valid proof
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise MalformedProofPathException(
                f"Invalid inclusion proof document: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def to_path(self) -> ProofPath:
        """
        Convert back to a proof path.

        Raises:
            MalformedProofPathException: If a sibling digest length differs
                from the root's length
        """
        size = self.digest_size
        path: list[ProofStep] = []
        for i, model in enumerate(self.steps):
            step = model.to_step()
            if len(step.sibling_digest) != size:
                raise MalformedProofPathException(
                    f"Step {i} sibling digest has {len(step.sibling_digest)} bytes, "
                    f"expected {size}",
                    details={"step": i},
                )
            path.append(step)
        return tuple(path)


__all__ = [
    "ProofStepModel",
    "InclusionProof",
]
