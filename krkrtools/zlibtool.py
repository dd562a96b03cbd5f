"""Zlib helpers used by the XP3 packer and reader."""

import zlib
from typing import BinaryIO

_CHUNK = 16384
_LEVEL = 9


def compress(data: bytes) -> bytes:
    """Compress data with the best zlib compression level."""
    return zlib.compress(bytes(data), _LEVEL)


def decompress(data: bytes) -> bytes:
    """Inflate a complete zlib stream; raises ``ValueError`` on bad data."""
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as exc:
        raise ValueError(f"failed to decompress data: {exc}") from exc


def compress_stream(source: BinaryIO, sink: BinaryIO) -> int:
    """Compress everything read from ``source`` into ``sink``.

    Returns the Adler-32 checksum of the uncompressed data.
    """
    deflater = zlib.compressobj(_LEVEL)
    checksum = zlib.adler32(b"")
    while True:
        chunk = source.read(_CHUNK)
        if not chunk:
            break
        checksum = zlib.adler32(chunk, checksum)
        sink.write(deflater.compress(chunk))
    sink.write(deflater.flush())
    return checksum & 0xFFFFFFFF


def decompress_stream(source: BinaryIO, sink: BinaryIO) -> int:
    """Inflate one zlib stream read from ``source`` into ``sink``.

    Reading stops at the end of the zlib stream. Returns the number of
    bytes written; raises ``ValueError`` on corrupt or truncated input.
    """
    inflater = zlib.decompressobj()
    written = 0
    while not inflater.eof:
        chunk = source.read(_CHUNK)
        if not chunk:
            raise ValueError("failed to decompress data: truncated zlib stream")
        try:
            out = inflater.decompress(chunk)
        except zlib.error as exc:
            raise ValueError(f"failed to decompress data: {exc}") from exc
        if out:
            sink.write(out)
            written += len(out)
    return written