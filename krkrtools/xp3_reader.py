"""Reading files out of unencrypted XP3 archives."""

import io
from typing import BinaryIO, List, Optional

from .xp3_models import (
    V230MAGIC,
    XP3_MAGIC,
    FileIndexEntry,
    Xp3FormatError,
    read_index_entry,
    read_index_header,
)
from .zlibtool import decompress_stream

_CHUNK = 64 * 1024
_V230_MARKER = V230MAGIC[11:19]
_U64_SIZE = 8


class _Window:
    """A read-only view of ``size`` bytes of a stream from its current position."""

    def __init__(self, stream: BinaryIO, size: int) -> None:
        self._stream = stream
        self._remaining = size

    def read(self, size: int = -1) -> bytes:
        if self._remaining <= 0:
            return b""
        wanted = self._remaining if size is None or size < 0 else min(size, self._remaining)
        data = self._stream.read(wanted)
        self._remaining -= len(data)
        return data


def _read_entries(stream: BinaryIO) -> List[FileIndexEntry]:
    entries: List[FileIndexEntry] = []
    while True:
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        if end == position:
            break
        stream.seek(position)
        try:
            entries.append(read_index_entry(stream))
        except EOFError:
            break
    return entries


class Xp3Reader:
    """Index of an XP3 archive read from a seekable binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        stream.seek(0)
        if stream.read(len(XP3_MAGIC)) != XP3_MAGIC:
            raise Xp3FormatError("not an XP3 file")

        if stream.read(len(_V230_MARKER)) == _V230_MARKER:
            stream.seek(len(V230MAGIC))
        else:
            stream.seek(len(XP3_MAGIC))

        raw_offset = stream.read(_U64_SIZE)
        if len(raw_offset) < _U64_SIZE:
            raise Xp3FormatError("XP3 file is truncated")
        self.index_offset = int.from_bytes(raw_offset, "little")
        stream.seek(self.index_offset)

        try:
            self.index_header = read_index_header(stream)
        except EOFError as exc:
            raise Xp3FormatError("failed to read the index header") from exc

        if self.index_header.compression_flag == 0:
            self.entries = _read_entries(stream)
        else:
            index = io.BytesIO()
            decompress_stream(stream, index)
            index.seek(0)
            self.entries = _read_entries(index)

        self._names = [entry.info.name for entry in self.entries]

    def names(self) -> List[str]:
        """Return the archived file names in index order."""
        return list(self._names)

    def _find(self, name: str) -> Optional[FileIndexEntry]:
        return next((entry for entry in self.entries if entry.info.name == name), None)

    def extract(self, name: str, output: BinaryIO) -> None:
        """Write the contents of ``name`` to ``output``.

        Raises ``KeyError`` when the archive holds no such file.
        """
        entry = self._find(name)
        if entry is None:
            raise KeyError(name)
        for segment in entry.segments:
            self._stream.seek(segment.offset)
            window = _Window(self._stream, segment.compressed_size)
            if segment.flag == 1:
                decompress_stream(window, output)
            else:
                for chunk in iter(lambda: window.read(_CHUNK), b""):
                    output.write(chunk)