"""Allow ``python -m spheretrace``."""

import sys

from spheretrace.cli import main

if __name__ == "__main__":
    sys.exit(main())
