"""
Schemas
File: __init__.py

Purpose: Export error models and verification results.

The inclusion proof transport model depends on the hashing and proof-path
modules; import it from mktree.schemas.proof.
"""

from .errors import (
    ConfigurationException,
    ErrorCodes,
    HasherConfigurationException,
    MalformedProofPathException,
    MktreeError,
    MktreeException,
)
from .verification import VerificationResult

__all__ = [
    "ConfigurationException",
    "ErrorCodes",
    "HasherConfigurationException",
    "MalformedProofPathException",
    "MktreeError",
    "MktreeException",
    "VerificationResult",
]
