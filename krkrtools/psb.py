"""Reading and writing the header of PSB (scene) files."""

import struct
from dataclasses import astuple, dataclass
from typing import Optional

MAGIC = b"PSB\x00"
_BASE = struct.Struct("<4sHH8I")
_U32 = struct.Struct("<I")


class PsbError(ValueError):
    """Raised when a PSB header cannot be parsed."""


@dataclass
class PsbHeader:
    """Fixed fields of a PSB header; later versions add optional offsets."""

    version: int
    header_encrypt: int = 0
    header_length: int = 0
    offset_names: int = 0
    offset_strings: int = 0
    offset_strings_data: int = 0
    offset_chunk_offsets: int = 0
    offset_chunk_lengths: int = 0
    offset_chunk_data: int = 0
    offset_entries: int = 0
    checksum: Optional[int] = None
    offset_extra_chunk_offsets: Optional[int] = None
    offset_extra_chunk_lengths: Optional[int] = None
    offset_extra_chunk_data: Optional[int] = None

    def to_bytes(self) -> bytes:
        """Serialise the header; optional fields are written only when set."""
        fields = astuple(self)
        head = _BASE.pack(MAGIC, *fields[:10])
        tail = b"".join(_U32.pack(value) for value in fields[10:] if value is not None)
        return head + tail


def _optional_count(version: int) -> int:
    if version >= 4:
        return 4
    if version >= 3:
        return 1
    return 0


def parse_psb_header(data: bytes) -> PsbHeader:
    """Parse a PSB header from the start of ``data``."""
    raw = bytes(data)
    if len(raw) < _BASE.size:
        raise PsbError("truncated PSB header")
    magic, *fields = _BASE.unpack_from(raw)
    if magic != MAGIC:
        raise PsbError(f"bad PSB magic: {magic!r}")
    version = fields[0]
    if not 1 <= version <= 4:
        raise PsbError(f"unsupported version: {version}")
    count = _optional_count(version)
    if len(raw) < _BASE.size + count * _U32.size:
        raise PsbError("truncated PSB header")
    extras = struct.unpack_from(f"<{count}I", raw, _BASE.size)
    padding = (None,) * (4 - count)
    return PsbHeader(*fields, *extras, *padding)