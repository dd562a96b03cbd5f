"""Packing files and directories into XP3 archives."""

import argparse
import sys
import zlib
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from .pathtool import list_files, normalize_archive_name
from .xp3_models import (
    V230MAGIC,
    FileIndexEntry,
    FileIndexHeader,
    FileIndexInfo,
    SegmentEntry,
)
from .zlibtool import compress, compress_stream

PathLike = Union[str, Path]

_CHUNK = 64 * 1024
_OFFSET_SIZE = 8


def _copy_with_adler(source: BinaryIO, sink: BinaryIO) -> int:
    checksum = zlib.adler32(b"")
    for chunk in iter(lambda: source.read(_CHUNK), b""):
        checksum = zlib.adler32(chunk, checksum)
        sink.write(chunk)
    return checksum & 0xFFFFFFFF


def default_output_path(input_path: PathLike) -> Path:
    """Return ``<stem>.xp3`` in the current directory for the given input."""
    return Path(f"{Path(input_path).stem}.xp3")


def pack(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    compress_files: bool = True,
    compress_index: bool = True,
    keep_dirs: bool = True,
) -> List[Tuple[Path, str]]:
    """Pack a file or a directory tree into an XP3 archive.

    Returns ``(source path, archive name)`` pairs in the order written.
    Raises ``FileNotFoundError`` when the input does not exist.
    """
    source = Path(input_path)
    if not source.exists():
        raise FileNotFoundError(f"{source} does not exist")
    files = list_files(source)
    target = Path(output_path) if output_path is not None else default_output_path(source)
    segment_flag = 1 if compress_files else 0

    packed: List[Tuple[Path, str]] = []
    entries: List[FileIndexEntry] = []
    with target.open("wb") as out:
        out.write(V230MAGIC)
        offset_position = out.tell()
        out.write(bytes(_OFFSET_SIZE))

        for path in files:
            name = normalize_archive_name(str(path) if keep_dirs else path.name)
            start = out.tell()
            with path.open("rb") as src:
                if compress_files:
                    checksum = compress_stream(src, out)
                else:
                    checksum = _copy_with_adler(src, out)
            stored = out.tell() - start
            raw = path.stat().st_size
            entries.append(
                FileIndexEntry(
                    FileIndexInfo(0, raw, stored, name),
                    [SegmentEntry(segment_flag, start, raw, stored)],
                    checksum,
                )
            )
            packed.append((path, name))

        index = b"".join(entry.to_bytes() for entry in entries)
        index_offset = out.tell()
        if compress_index:
            body = compress(index)
            header = FileIndexHeader(1, len(body), len(index))
        else:
            body = index
            header = FileIndexHeader(0, len(index))
        out.write(header.to_bytes())
        out.write(body)

        out.seek(offset_position)
        out.write(index_offset.to_bytes(_OFFSET_SIZE, "little"))
    return packed


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="xp3pack",
        description=(
            "Pack files into an XP3 archive. By default file contents and the "
            "index are compressed and the directory structure is kept."
        ),
    )
    parser.add_argument("input", help="input file or directory")
    parser.add_argument("-o", "--output", default=None, help="output archive name (without .xp3)")
    parser.add_argument(
        "--no-compress-file", action="store_true", help="store file contents uncompressed"
    )
    parser.add_argument(
        "--no-compress-index", action="store_true", help="store the index uncompressed"
    )
    parser.add_argument("--no-dirs", action="store_true", help="do not keep the directory structure")
    parser.add_argument("--version", action="version", version="0.1.2")
    args = parser.parse_args(argv)

    source = Path(args.input)
    target = Path(f"{args.output}.xp3") if args.output is not None else default_output_path(source)
    try:
        packed = pack(
            source,
            target,
            compress_files=not args.no_compress_file,
            compress_index=not args.no_compress_index,
            keep_dirs=not args.no_dirs,
        )
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for path, name in packed:
        print(f"packed {path} -> {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())