"""
Proof Paths
Proof step types and their byte-level wire encoding.

A proof path is the ordered list of sibling digests needed to recompute
the root from one leaf, ordered from the leaf's immediate sibling up to
(but excluding) the root.

Wire Format (Hard Contract):
- Each step: 1 direction tag byte, then the fixed-length sibling digest
  - 0x00: sibling is on the left  (parent = H(sibling || current))
  - 0x01: sibling is on the right (parent = H(current || sibling))
- A path: its steps concatenated in leaf-to-root order
- No length prefix, version, or algorithm identifier; the digest size is
  agreed out of band (it is the hasher's digest_size)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from mktree.schemas.errors import MalformedProofPathException


class Direction(IntEnum):
    """Side the sibling digest occupies relative to the node being proven."""
    SIBLING_IS_LEFT = 0x0
    SIBLING_IS_RIGHT = 0x1


@dataclass(frozen=True)
class ProofStep:
    """
    One level of a proof path.

    Attributes:
        direction: Which side the sibling sits on at this level
        sibling_digest: Digest of the sibling node
    """
    direction: Direction
    sibling_digest: bytes


ProofPath = tuple[ProofStep, ...]


def encode_proof_step(step: ProofStep) -> bytes:
    """Encode one step as tag byte + sibling digest."""
    return bytes((int(step.direction),)) + step.sibling_digest


def encode_proof_path(path: Iterable[ProofStep]) -> bytes:
    """
    Encode a proof path for transport.

    Args:
        path: Steps in leaf-to-root order

    Returns:
        Concatenated step encodings (empty bytes for an empty path)
    """
    return b"".join(encode_proof_step(step) for step in path)


def decode_proof_path(data: bytes, digest_size: int) -> ProofPath:
    """
    Decode a proof path produced by encode_proof_path.

    The whole input is validated before any step is returned, so a
    malformed path never reaches root reconstruction.

    Args:
        data: Encoded path bytes
        digest_size: Length of every sibling digest

    Returns:
        Tuple of ProofStep in leaf-to-root order

    Raises:
        MalformedProofPathException: On an unknown direction tag or a
            truncated sibling digest
        ValueError: If digest_size is not positive
    """
    if digest_size <= 0:
        raise ValueError(f"digest_size must be positive, got {digest_size}")

    data = bytes(data)
    step_size = 1 + digest_size
    steps: list[ProofStep] = []
    offset = 0

    while offset < len(data):
        tag = data[offset]
        try:
            direction = Direction(tag)
        except ValueError:
            raise MalformedProofPathException(
                f"Unknown direction tag 0x{tag:02x} at offset {offset}",
                offset=offset,
                details={"tag": tag},
            ) from None

        if offset + step_size > len(data):
            raise MalformedProofPathException(
                f"Truncated sibling digest at offset {offset + 1}: expected "
                f"{digest_size} bytes, got {len(data) - offset - 1}",
                offset=offset + 1,
                details={"expected": digest_size, "actual": len(data) - offset - 1},
            )

        steps.append(ProofStep(direction, data[offset + 1:offset + step_size]))
        offset += step_size

    return tuple(steps)


__all__ = [
    "Direction",
    "ProofStep",
    "ProofPath",
    "encode_proof_step",
    "encode_proof_path",
    "decode_proof_path",
]
