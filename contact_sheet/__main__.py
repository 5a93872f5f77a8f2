"""Entry point for ``python -m contact_sheet``."""

import sys

from contact_sheet.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
