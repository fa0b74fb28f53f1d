"""
CLI Input/Output Helpers

Reading data blocks from files and writing command results.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from mktree.crypto.hashing import from_hex
from mktree.schemas.errors import MktreeError


logger = logging.getLogger(__name__)


def read_blocks(paths: Sequence[str], lines: bool = False) -> list[bytes]:
    """
    Read data blocks from files, in the order given.

    Args:
        paths: Input files
        lines: Treat every line of every file as one block (line endings
               stripped) instead of each whole file as one block

    Returns:
        Ordered list of blocks
    """
    blocks: list[bytes] = []
    for p in paths:
        data = Path(p).read_bytes()
        if lines:
            blocks.extend(data.splitlines())
        else:
            blocks.append(data)
    logger.debug(f"Read {len(blocks)} blocks from {len(paths)} file(s)")
    return blocks


def read_target_block(block_path: str | None, text: str | None) -> bytes:
    """Read the block to prove or verify, from a file or literal text."""
    if text is not None:
        return text.encode("utf-8")
    if block_path is None:
        raise ValueError("Either --block or --text is required")
    return Path(block_path).read_bytes()


def parse_root(value: str) -> bytes:
    """Parse a root digest given as hex, with or without 0x prefix."""
    value = value.strip().lower()
    if not value.startswith("0x"):
        value = "0x" + value
    return from_hex(value)


def write_json(data: Any, out: str | None = None) -> None:
    """Write JSON to a file, or to stdout when out is None."""
    text = json.dumps(data, indent=2)
    if out:
        Path(out).write_text(text + "\n")
        logger.info(f"Wrote {out}")
    else:
        print(text)


def write_bytes(data: bytes, out: str) -> None:
    Path(out).write_bytes(data)
    logger.info(f"Wrote {len(data)} bytes to {out}")


def print_error(message: str, code: str | None = None) -> None:
    if code:
        print(f"Error [{code}]: {message}", file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)


def report_error(code: str, message: str, as_json: bool = False) -> None:
    """Report an expected failure on stderr, or as a MktreeError document on stdout."""
    if as_json:
        write_json(MktreeError(code=code, message=message).model_dump())
    else:
        print_error(message, code)
