"""Allow `python -m rollcall`."""

import sys

from rollcall.interface.cli import main

if __name__ == "__main__":
    sys.exit(main())
