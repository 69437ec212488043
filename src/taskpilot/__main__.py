"""Module entrypoint for ``python -m taskpilot``."""

import sys

from taskpilot.cli import main

if __name__ == "__main__":
    sys.exit(main())
