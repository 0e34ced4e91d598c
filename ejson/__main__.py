"""
Main entry point for running ejson as a module.

Usage:
    python -m ejson <command> [options]
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
