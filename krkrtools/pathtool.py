"""Path helpers for building XP3 archives."""

import os
from pathlib import Path
from typing import List, Union

PathLike = Union[str, Path]


def list_files(path: PathLike) -> List[Path]:
    """Return every regular file under ``path`` (or ``path`` itself if a file).

    Symbolic links are not followed and a missing path yields no files.
    """
    root = Path(path)
    if root.is_symlink():
        return []
    if root.is_file():
        return [root]
    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            candidate = Path(dirpath) / name
            if not candidate.is_symlink() and candidate.is_file():
                found.append(candidate)
    return found


def normalize_archive_name(path: str) -> str:
    """Use forward slashes and drop a leading ``./`` from an archive name."""
    name = str(path).replace("\\", "/")
    return name[2:] if name.startswith("./") else name