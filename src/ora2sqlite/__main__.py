"""
Entry point for python -m ora2sqlite
"""

import sys

from ora2sqlite.cli import main

if __name__ == "__main__":
    sys.exit(main())
