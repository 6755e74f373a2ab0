"""
snapctl Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m snapctl`. It delegates to the CLI main function.
"""

import sys

from snapctl.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
