#!/usr/bin/env python3
"""nodeman entry point"""

import sys

from nodeman.cli.main import run

if __name__ == "__main__":
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        sys.exit(130)
