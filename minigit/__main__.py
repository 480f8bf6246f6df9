"""Entry point for running Mini Git via: python3 -m minigit <command>"""

from __future__ import annotations

import sys

from .app.cli import main

if __name__ == "__main__":
    sys.exit(main())
