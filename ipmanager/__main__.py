"""Run the interactive shell with ``python -m ipmanager``."""

import sys

from .shell import main

if __name__ == "__main__":
    sys.exit(main())
