#!/usr/bin/env python3
"""
Runner script for the corner-crop variant without installing lightcrop.

Usage:
    uv run python scripts/corner_crop.py --input scans/ --corner tl --percent 5
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lightcrop.cli import corner_main

if __name__ == "__main__":
    sys.exit(corner_main())
