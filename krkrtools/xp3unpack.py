"""Unpacking unencrypted XP3 archives to a directory."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .xp3_reader import Xp3Reader

PathLike = Union[str, Path]


def unpack(input_path: PathLike, output_dir: Optional[PathLike] = None) -> List[Tuple[str, Path]]:
    """Extract every file of an XP3 archive into ``output_dir``.

    The directory defaults to the archive's stem in the current directory.
    Returns ``(archive name, written path)`` pairs in index order.
    """
    source = Path(input_path)
    if not source.exists():
        raise FileNotFoundError(f"{source} does not exist")
    if not source.is_file():
        raise ValueError(f"{source} is not a file")
    target_dir = Path(output_dir) if output_dir is not None else Path(source.stem)
    target_dir.mkdir(parents=True, exist_ok=True)

    written: List[Tuple[str, Path]] = []
    with source.open("rb") as stream:
        reader = Xp3Reader(stream)
        for name in reader.names():
            target = target_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as out:
                reader.extract(name, out)
            written.append((name, target))
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="xp3unpack", description="Unpack unencrypted XP3 archives."
    )
    parser.add_argument("input", help="path of the XP3 file")
    parser.add_argument("-o", "--output", default=None, help="output directory")
    parser.add_argument("--version", action="version", version="0.1.2")
    args = parser.parse_args(argv)

    try:
        written = unpack(args.input, args.output)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for name, path in written:
        print(f"unpacked {name} -> {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())