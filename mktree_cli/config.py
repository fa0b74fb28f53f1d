"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Environment variables (MKTREE_* prefix) override file settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mktree.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Config files checked, in order, when no --config is given."""
    return [
        Path.cwd() / "mktree.yaml",
        Path.cwd() / ".mktree.yaml",
        Path.home() / ".config" / "mktree" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional path to a YAML config file. Must exist if given.

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                logger.debug(f"Using config file: {default_path}")
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()
