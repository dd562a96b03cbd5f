"""Turn scrambled KSD files back into UTF-8 text."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .ksd_header import HEADER_SIZE, Mode, file_mode
from .scramble import decompress_zlib, descramble_mode0, descramble_mode1
from .textcodec import utf16le_to_utf8

UTF8_BOM = b"\xef\xbb\xbf"
_SIZE_PREFIX = 16

PathLike = Union[str, Path]


def descramble_bytes(data: bytes) -> bytes:
    """Decode the full contents of a KSD file into UTF-8 bytes.

    Mode 2 output starts with a UTF-8 byte order mark.
    """
    raw = bytes(data)
    if len(raw) < HEADER_SIZE:
        raise ValueError("input is shorter than the KSD header")
    mode = file_mode(raw[:HEADER_SIZE])
    payload = raw[HEADER_SIZE:]
    if mode is Mode.MODE0:
        return utf16le_to_utf8(descramble_mode0(payload))
    if mode is Mode.MODE1:
        return utf16le_to_utf8(descramble_mode1(payload))
    if len(payload) < _SIZE_PREFIX:
        raise ValueError("mode 2 payload is missing its size fields")
    return UTF8_BOM + utf16le_to_utf8(decompress_zlib(payload[_SIZE_PREFIX:]))


def default_output_path(input_path: PathLike) -> Path:
    """Return the input path with a ``.txt`` extension."""
    path = Path(input_path)
    return path.parent / f"{path.stem}.txt"


def descramble_file(input_path: PathLike, output_path: Optional[PathLike] = None) -> Path:
    """Descramble a KSD file to disk and return the path written."""
    source = Path(input_path)
    if not source.exists():
        raise FileNotFoundError(f"{source} does not exist")
    target = Path(output_path) if output_path is not None else default_output_path(source)
    target.write_bytes(descramble_bytes(source.read_bytes()))
    return target


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="krkr-descrambler", description="Descramble KSD files into text."
    )
    parser.add_argument("input")
    parser.add_argument("-o", "--output", default=None)
    parser.add_argument("--version", action="version", version="1.0")
    args = parser.parse_args(argv)

    source = Path(args.input)
    if not source.exists():
        print(f"{args.input} does not exist")
        return 1
    target = Path(args.output) if args.output is not None else default_output_path(source)
    print(target)
    try:
        descramble_file(source, target)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())