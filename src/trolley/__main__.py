# src/trolley/__main__.py
"""Module entry point: `python -m trolley` refreshes currency rates once."""
import sys

from trolley.app import main

if __name__ == "__main__":
    sys.exit(main())
