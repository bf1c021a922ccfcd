import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

IMAGE_EXTS = {'.jpg', '.jpeg', '.png'}
JPEG_EXTS = {'.jpg', '.jpeg'}
METADATA_FILES = {'.DS_Store'}


def iter_files(root: Path, exclude: Optional[Path] = None) -> Iterator[Path]:
    """
    Recursively yield file paths under `root` using os.scandir for speed.
    Directories equal to `exclude` are not entered.
    """
    excluded = exclude.resolve() if exclude is not None else None
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    if entry.is_dir(follow_symlinks=False):
                        path = Path(entry.path)
                        if excluded is not None and path.resolve() == excluded:
                            continue
                        stack.append(path)
                    elif entry.is_file(follow_symlinks=False):
                        yield Path(entry.path)
        except PermissionError:
            continue


def is_metadata_file(path: Path) -> bool:
    """macOS resource forks and Finder files."""
    return path.name.startswith("._") or path.name in METADATA_FILES


def iter_image_files(root: Path, exts: Iterable[str] = IMAGE_EXTS,
                     exclude: Optional[Path] = None) -> Iterator[Path]:
    """Yield image files under `root` whose extension (case-insensitive) is in `exts`."""
    allowed = {e.lower() for e in exts}
    for path in iter_files(root, exclude=exclude):
        if path.suffix.lower() in allowed and not is_metadata_file(path):
            yield path
