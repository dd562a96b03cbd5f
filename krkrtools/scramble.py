"""The three KSD payload transforms: byte-pair XOR, bit swap and zlib."""

import struct
import zlib
from typing import Iterator, Tuple

_ZLIB_HEADER = struct.Struct(">QQ")
_BIT_SWAP = bytes(((b & 0xAA) >> 1) | ((b & 0x55) << 1) for b in range(256))


def _pairs(data: bytes) -> Iterator[Tuple[int, int]]:
    it = iter(data)
    return zip(it, it)


def _is_control(low: int, high: int) -> bool:
    return high == 0 and low < 0x20


def scramble_mode0(data: bytes) -> bytes:
    """Scramble UTF-16LE data with the mode 0 transform.

    Raises ``ValueError`` when the data has an odd length.
    """
    raw = bytes(data)
    if len(raw) % 2:
        raise ValueError("mode 0 data must have an even length")
    out = bytearray()
    for low, high in _pairs(raw):
        if not _is_control(low, high):
            low ^= 1
            high ^= low & 0xFE
        out.extend((low, high))
    return bytes(out)


def descramble_mode0(data: bytes) -> bytes:
    """Undo the mode 0 transform; a trailing odd byte is left as it is."""
    raw = bytes(data)
    out = bytearray()
    for low, high in _pairs(raw):
        if not _is_control(low, high):
            high ^= low & 0xFE
            low ^= 1
        out.extend((low, high))
    if len(raw) % 2:
        out.append(raw[-1])
    return bytes(out)


def _swap_bits(data: bytes) -> bytes:
    raw = bytes(data)
    even = len(raw) - len(raw) % 2
    return raw[:even].translate(_BIT_SWAP) + raw[even:]


def scramble_mode1(data: bytes) -> bytes:
    """Swap each pair of neighbouring bits; a trailing odd byte is kept."""
    return _swap_bits(data)


def descramble_mode1(data: bytes) -> bytes:
    """Undo the mode 1 transform, which is its own inverse."""
    return _swap_bits(data)


def compress_zlib(data: bytes) -> bytes:
    """Compress data and prefix it with the big-endian size fields.

    The first field is the compressed length plus the 16 header bytes,
    the second the uncompressed length.
    """
    raw = bytes(data)
    compressed = zlib.compress(raw, 9)
    return _ZLIB_HEADER.pack(len(compressed) + _ZLIB_HEADER.size, len(raw)) + compressed


def decompress_zlib(data: bytes) -> bytes:
    """Inflate a zlib stream (without the 16-byte size prefix)."""
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as exc:
        raise ValueError(f"invalid zlib data: {exc}") from exc