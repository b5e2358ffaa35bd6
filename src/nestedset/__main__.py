"""Entry point for running nestedset directly.

Usage:
    python -m nestedset
"""

import sys

from nestedset.cli import main

if __name__ == "__main__":
    sys.exit(main())
