"""
Main entry point for running treewalker as a module.

Usage:
    python -m treewalker ROOT [ROOT ...] [options]
"""

import sys

from treewalker.cli import main

if __name__ == "__main__":
    sys.exit(main())
