#!/usr/bin/env python3
"""
Runner script for lightcrop without installing it.
This makes it easy to run the tool with uv: uv run python scripts/run.py --input <dir>
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lightcrop.cli import main

if __name__ == "__main__":
    sys.exit(main())
