"""
Runtime Configuration Module

Provides configuration loading and management for mktree.
"""

from .runtime import (
    DEFAULT_HASH_ALGORITHM,
    ENV_PREFIX,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "ENV_PREFIX",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
