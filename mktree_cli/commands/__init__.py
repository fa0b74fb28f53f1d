"""
CLI command modules.
"""

from mktree_cli.commands import prove, root, tree, verify

__all__ = ["prove", "root", "tree", "verify"]
