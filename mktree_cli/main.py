"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    mktree root FILE... [--lines] [--json]
    mktree prove (--block PATH | --text TEXT) FILE... [--lines] [--out PATH] [--binary]
    mktree verify PROOF (--block PATH | --text TEXT) --root HEX [--binary] [--json]
    mktree tree FILE... [--lines]
    mktree config [--init | --show] [--path PATH]

Environment Variables:
    MKTREE_HASH_ALGORITHM   hashlib algorithm name (default: sha256)
    MKTREE_MAX_WORKERS      Worker threads for tree construction
    MKTREE_LOG_LEVEL        Log level (default: INFO)
    MKTREE_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from mktree.config.runtime import get_default_config_template, set_default_config
from mktree_cli import __version__
from mktree_cli.commands import prove, root, tree, verify
from mktree_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_block_source(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--block", "-b",
        type=str,
        help="File whose contents are the block",
    )
    group.add_argument(
        "--text", "-t",
        type=str,
        help="Literal block contents (UTF-8)",
    )


def _add_inputs(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="+",
        help="Input files, in order",
    )
    parser.add_argument(
        "--lines",
        action="store_true",
        default=False,
        help="Treat each line of each file as one block (default: one block per file)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mktree",
        description="Build Merkle roots over data blocks, and prove or verify block membership.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./mktree.yaml or ~/.config/mktree/config.yaml)",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        help="hashlib algorithm name (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of the input blocks",
    )
    _add_inputs(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof for one block",
        description="Build the tree over the input blocks and extract the proof for one block.",
    )
    _add_inputs(prove_parser)
    _add_block_source(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path (default: stdout)",
    )
    prove_parser.add_argument(
        "--binary",
        action="store_true",
        default=False,
        help="Write the raw wire-encoded proof path instead of JSON (requires --out)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a block against an inclusion proof",
        description="Recompute the root from the block and proof, and compare with the trusted root.",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Proof file (JSON, or wire-encoded with --binary)",
    )
    _add_block_source(verify_parser)
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Trusted root as hex, obtained independently of the proof (required)",
    )
    verify_parser.add_argument(
        "--binary",
        action="store_true",
        default=False,
        help="Proof file is a wire-encoded proof path",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the proof tree of the input blocks",
    )
    _add_inputs(tree_parser)
    tree_parser.set_defaults(func=tree.tree_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="mktree.yaml",
        help="Path for config file (default: mktree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MKTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: mktree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed or block not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
        if args.algorithm:
            config = replace(config, hash_algorithm=args.algorithm)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    set_default_config(config)
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
