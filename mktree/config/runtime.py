"""
Runtime Configuration

Central configuration for hashing, tree construction, and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from mktree.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "MKTREE_"

DEFAULT_HASH_ALGORITHM = "sha256"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for mktree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    max_workers: Optional[int] = None  # None or 1 builds sequentially
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.hash_algorithm, str):
            raise ConfigurationException(
                f"hash_algorithm must be a string, got {self.hash_algorithm!r}",
                key="hash_algorithm",
            )
        if not isinstance(self.log_level, str):
            raise ConfigurationException(
                f"log_level must be a string, got {self.log_level!r}", key="log_level"
            )
        # bool is an int subclass; "max_workers: yes" in YAML is not a count
        if self.max_workers is not None and (
            not isinstance(self.max_workers, int) or isinstance(self.max_workers, bool)
        ):
            raise ConfigurationException(
                f"max_workers must be an integer, got {self.max_workers!r}",
                key="max_workers",
            )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigurationException(
                f"log_file must be a string, got {self.log_file!r}", key="log_file"
            )
        if not isinstance(self.extra, dict):
            raise ConfigurationException(
                f"extra must be a mapping, got {self.extra!r}", key="extra"
            )

        self.hash_algorithm = self.hash_algorithm.strip().lower()
        self.log_level = self.log_level.strip().upper()
        if not self.hash_algorithm:
            raise ConfigurationException(
                "hash_algorithm must not be empty", key="hash_algorithm"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationException(
                f"max_workers must be positive, got {self.max_workers}",
                key="max_workers",
            )
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.log_level}", key="log_level"
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MKTREE_HASH_ALGORITHM: hashlib algorithm name (default: sha256)
        - MKTREE_MAX_WORKERS: worker threads for tree construction
        - MKTREE_LOG_LEVEL: log level (default: INFO)
        - MKTREE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}MAX_WORKERS"):
            raw = os.getenv(f"{ENV_PREFIX}MAX_WORKERS", "")
            try:
                overrides["max_workers"] = int(raw)
            except ValueError as e:
                raise ConfigurationException(
                    f"{ENV_PREFIX}MAX_WORKERS must be an integer, got {raw!r}",
                    key="max_workers",
                ) from e
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping: {path}"
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        known = {"hash_algorithm", "max_workers", "log_level", "log_file", "extra"}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationException(
                f"Unknown configuration keys: {sorted(unknown)}",
                details={"unknown_keys": sorted(unknown)},
            )

        return cls(
            hash_algorithm=data.get("hash_algorithm") or DEFAULT_HASH_ALGORITHM,
            max_workers=data.get("max_workers"),
            log_level=data.get("log_level") or "INFO",
            log_file=data.get("log_file"),
            extra=data.get("extra") or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        merged.update(overrides)
        merged["extra"] = copy.deepcopy(self.extra)
        return RuntimeConfig.from_dict(merged)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return (
        "# mktree configuration\n"
        "# Environment variables (MKTREE_* prefix) override these values.\n"
        f"hash_algorithm: {DEFAULT_HASH_ALGORITHM}\n"
        "max_workers: null\n"
        "log_level: INFO\n"
        "log_file: null\n"
    )


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
