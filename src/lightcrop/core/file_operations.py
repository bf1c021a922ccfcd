#!/usr/bin/env python3
"""
file_operations.py: Output naming and the temp-file-then-rename protocol.

Workers write to a temporary name that embeds their worker id and the source
filename, so two workers never touch the same path while processing. Only once the
result is known is the file renamed to its final name.
"""

import os
from pathlib import Path

from ..utils.log_utils import get_logger

logger = get_logger(__name__)

TEMP_PREFIX = ".temp_"
CROPPED_SUFFIX = "_cropped"


def temp_path(output_dir: Path, worker_id: int, filename: str) -> Path:
    """Worker-and-file-unique scratch path inside `output_dir`."""
    return output_dir / f"{TEMP_PREFIX}{worker_id}_{filename}"


def final_path(output_dir: Path, filename: str, was_cropped: bool) -> Path:
    """`name_cropped.ext` for cropped results, `name.ext` otherwise."""
    if was_cropped:
        name = Path(filename)
        return output_dir / f"{name.stem}{CROPPED_SUFFIX}{name.suffix}"
    return output_dir / filename


def discard(path: Path) -> None:
    """Remove a scratch file if it exists."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", path, e)


def commit(tmp: Path, dest: Path) -> Path:
    """
    Atomically move `tmp` to `dest`, replacing any existing file.
    On failure the temporary file is removed and the error re-raised.
    """
    try:
        os.replace(tmp, dest)
    except OSError:
        discard(tmp)
        raise
    return dest
