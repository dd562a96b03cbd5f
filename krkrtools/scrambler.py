"""Turn UTF-8 text files into scrambled KSD files."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .ksd_header import Mode
from .scramble import compress_zlib, scramble_mode0, scramble_mode1
from .textcodec import utf8_to_utf16le

PathLike = Union[str, Path]
ModeLike = Union[Mode, int, str]


def _as_mode(mode: ModeLike) -> Mode:
    try:
        return Mode(int(mode))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"unknown scramble mode: {mode!r}") from exc


def scramble_bytes(text: bytes, mode: ModeLike) -> bytes:
    """Return the full KSD file contents for UTF-8 text in the given mode."""
    chosen = _as_mode(mode)
    utf16 = utf8_to_utf16le(text)
    if chosen is Mode.MODE0:
        payload = scramble_mode0(utf16)
    elif chosen is Mode.MODE1:
        payload = scramble_mode1(utf16)
    else:
        payload = compress_zlib(utf16)
    return chosen.header() + payload


def default_output_path(input_path: PathLike) -> Path:
    """Return the input path with a ``.ksd`` extension."""
    path = Path(input_path)
    return path.parent / f"{path.stem}.ksd"


def scramble_file(
    input_path: PathLike, mode: ModeLike, output_path: Optional[PathLike] = None
) -> Path:
    """Scramble a UTF-8 text file to disk and return the path written."""
    source = Path(input_path)
    if not source.exists():
        raise FileNotFoundError(f"{source} does not exist")
    target = Path(output_path) if output_path is not None else default_output_path(source)
    target.write_bytes(scramble_bytes(source.read_bytes(), mode))
    return target


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="krkr-scrambler", description="Scramble text files into KSD files."
    )
    parser.add_argument("input", help="input file path")
    parser.add_argument("mode", choices=["0", "1", "2"], help="scramble mode")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="output path (defaults to the input name with a .ksd extension)",
    )
    parser.add_argument("--version", action="version", version="1.0")
    args = parser.parse_args(argv)

    source = Path(args.input)
    if not source.exists():
        print(f"{args.input} does not exist")
        return 1
    target = Path(args.output) if args.output is not None else default_output_path(source)
    print(target)
    try:
        scramble_file(source, args.mode, target)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())