"""Binary structures of the XP3 archive index."""

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

V230MAGIC = bytes(
    (
        0x58, 0x50, 0x33, 0x0D, 0x0A, 0x20, 0x0A, 0x1A, 0x8B, 0x67, 0x01, 0x17, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x80, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    )
)
XP3_MAGIC = V230MAGIC[:11]

FILE_MAGIC = b"File"
INFO_MAGIC = b"info"
SEGMENT_MAGIC = b"segm"
ADLER_MAGIC = b"adlr\x04\x00\x00\x00\x00\x00\x00\x00"

_U8_U64 = struct.Struct("<BQ")
_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")
_INFO = struct.Struct("<QIQQH")
_SEGMENT = struct.Struct("<IQQQ")
SEGMENT_SIZE = _SEGMENT.size
_INFO_FIXED = _INFO.size - _U64.size


class Xp3FormatError(ValueError):
    """Raised when XP3 index data is malformed."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise EOFError("unexpected end of XP3 index data")
    return data


def _expect(stream: BinaryIO, magic: bytes) -> None:
    found = _read_exact(stream, len(magic))
    if found != magic:
        raise Xp3FormatError(f"expected {magic!r}, found {found!r}")


@dataclass
class FileIndexHeader:
    """Header in front of the index; ``raw_size`` is set when it is compressed."""

    compression_flag: int
    compression_size: int
    raw_size: Optional[int] = None

    def to_bytes(self) -> bytes:
        head = _U8_U64.pack(self.compression_flag, self.compression_size)
        if self.raw_size is None:
            return head
        return head + _U64.pack(self.raw_size)


@dataclass
class FileIndexInfo:
    """The ``info`` chunk: name and sizes of one archived file."""

    flag: int
    raw_size: int
    compressed_size: int
    name: str
    entry_size: Optional[int] = None

    def to_bytes(self) -> bytes:
        try:
            encoded = self.name.encode("utf-16-le")
        except UnicodeEncodeError as exc:
            raise Xp3FormatError(f"cannot encode name {self.name!r}") from exc
        units = len(encoded) // 2
        if units > 0xFFFF:
            raise Xp3FormatError("file name is too long")
        size = self.entry_size if self.entry_size is not None else _INFO_FIXED + len(encoded)
        return (
            INFO_MAGIC
            + _INFO.pack(size, self.flag, self.raw_size, self.compressed_size, units)
            + encoded
        )


@dataclass
class SegmentEntry:
    """One stored piece of a file; ``flag`` 1 means zlib-compressed."""

    flag: int
    offset: int
    raw_size: int
    compressed_size: int

    def to_bytes(self) -> bytes:
        return _SEGMENT.pack(self.flag, self.offset, self.raw_size, self.compressed_size)


@dataclass
class FileIndexEntry:
    """A ``File`` chunk: info, segments and Adler-32 checksum."""

    info: FileIndexInfo
    segments: List[SegmentEntry] = field(default_factory=list)
    adler32: int = 1

    def to_bytes(self) -> bytes:
        segment_data = b"".join(segment.to_bytes() for segment in self.segments)
        body = (
            self.info.to_bytes()
            + SEGMENT_MAGIC
            + _U64.pack(len(segment_data))
            + segment_data
            + ADLER_MAGIC
            + _U32.pack(self.adler32)
        )
        return FILE_MAGIC + _U64.pack(len(body)) + body


def read_index_header(stream: BinaryIO) -> FileIndexHeader:
    """Read a :class:`FileIndexHeader`; raises ``EOFError`` when truncated."""
    flag, size = _U8_U64.unpack(_read_exact(stream, _U8_U64.size))
    raw_size = None
    if flag != 0:
        (raw_size,) = _U64.unpack(_read_exact(stream, _U64.size))
    return FileIndexHeader(flag, size, raw_size)


def _read_info(stream: BinaryIO) -> FileIndexInfo:
    _expect(stream, INFO_MAGIC)
    entry_size, flag, raw_size, compressed_size, units = _INFO.unpack(
        _read_exact(stream, _INFO.size)
    )
    raw_name = _read_exact(stream, units * 2)
    try:
        name = raw_name.decode("utf-16-le")
    except UnicodeDecodeError as exc:
        raise Xp3FormatError("failed to decode file name") from exc
    return FileIndexInfo(flag, raw_size, compressed_size, name, entry_size)


def read_index_entry(stream: BinaryIO) -> FileIndexEntry:
    """Read one :class:`FileIndexEntry`.

    Raises ``EOFError`` when the data ends early and
    :class:`Xp3FormatError` when a chunk tag or name is wrong.
    """
    _expect(stream, FILE_MAGIC)
    _read_exact(stream, _U64.size)
    info = _read_info(stream)
    _expect(stream, SEGMENT_MAGIC)
    (segment_size,) = _U64.unpack(_read_exact(stream, _U64.size))
    segments = [
        SegmentEntry(*_SEGMENT.unpack(_read_exact(stream, SEGMENT_SIZE)))
        for _ in range(segment_size // SEGMENT_SIZE)
    ]
    _expect(stream, ADLER_MAGIC)
    (adler32,) = _U32.unpack(_read_exact(stream, _U32.size))
    return FileIndexEntry(info, segments, adler32)