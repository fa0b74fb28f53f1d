"""
Module execution entry point.

Allows running with: python -m mktree_cli
"""

import sys
from mktree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
