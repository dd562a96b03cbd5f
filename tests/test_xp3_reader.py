import io
import zlib

import pytest

from krkrtools.xp3_models import (
    V230MAGIC,
    FileIndexEntry,
    FileIndexHeader,
    FileIndexInfo,
    SegmentEntry,
    Xp3FormatError,
)
from krkrtools.xp3_reader import Xp3Reader

FILES = [
    ("scenario/start.ks", b"*start\nhello world\n" * 20),
    ("image/bg.png", bytes(range(256)) * 8),
    ("empty.txt", b""),
]


def build_archive(files, compress_files=True, compress_index=True, legacy=False):
    prefix = V230MAGIC[:11] if legacy else V230MAGIC
    out = io.BytesIO()
    out.write(prefix)
    out.write(b"\x00" * 8)
    entries = []
    for name, data in files:
        offset = out.tell()
        out.write(zlib.compress(data) if compress_files else data)
        size = out.tell() - offset
        flag = 1 if compress_files else 0
        info = FileIndexInfo(0, len(data), size, name)
        entries.append(
            FileIndexEntry(info, [SegmentEntry(flag, offset, len(data), size)], zlib.adler32(data))
        )
    index = b"".join(entry.to_bytes() for entry in entries)
    index_offset = out.tell()
    if compress_index:
        packed = zlib.compress(index)
        out.write(FileIndexHeader(1, len(packed), len(index)).to_bytes())
        out.write(packed)
    else:
        out.write(FileIndexHeader(0, len(index)).to_bytes())
        out.write(index)
    out.seek(len(prefix))
    out.write(index_offset.to_bytes(8, "little"))
    out.seek(0)
    return out


def _extract(reader, name):
    sink = io.BytesIO()
    reader.extract(name, sink)
    return sink.getvalue()


@pytest.mark.parametrize("compress_files", [True, False])
@pytest.mark.parametrize("compress_index", [True, False])
def test_names_and_contents(compress_files, compress_index):
    reader = Xp3Reader(build_archive(FILES, compress_files, compress_index))
    assert reader.names() == [name for name, _ in FILES]
    for name, data in FILES:
        assert _extract(reader, name) == data


def test_index_header_flag_recorded():
    assert Xp3Reader(build_archive(FILES, compress_index=True)).index_header.compression_flag == 1
    assert Xp3Reader(build_archive(FILES, compress_index=False)).index_header.compression_flag == 0


def test_legacy_header_without_v230_block():
    reader = Xp3Reader(build_archive(FILES, legacy=True))
    assert reader.names() == [name for name, _ in FILES]
    assert _extract(reader, "image/bg.png") == FILES[1][1]


def test_index_offset_points_at_header():
    archive = build_archive(FILES, compress_index=False)
    reader = Xp3Reader(archive)
    raw = archive.getvalue()
    assert raw[reader.index_offset] == 0


def test_unicode_name():
    files = [("シナリオ/開始.ks", "こんにちは".encode("utf-8"))]
    reader = Xp3Reader(build_archive(files))
    assert reader.names() == ["シナリオ/開始.ks"]
    assert _extract(reader, "シナリオ/開始.ks") == files[0][1]


def test_multi_segment_file():
    first, second = b"first part ", b"second part"
    out = io.BytesIO()
    out.write(V230MAGIC)
    out.write(b"\x00" * 8)
    off1 = out.tell()
    out.write(zlib.compress(first))
    size1 = out.tell() - off1
    off2 = out.tell()
    out.write(second)
    segments = [
        SegmentEntry(1, off1, len(first), size1),
        SegmentEntry(0, off2, len(second), len(second)),
    ]
    info = FileIndexInfo(0, len(first + second), size1 + len(second), "joined.bin")
    index = FileIndexEntry(info, segments, zlib.adler32(first + second)).to_bytes()
    index_offset = out.tell()
    out.write(FileIndexHeader(0, len(index)).to_bytes())
    out.write(index)
    out.seek(32)
    out.write(index_offset.to_bytes(8, "little"))
    reader = Xp3Reader(out)
    assert _extract(reader, "joined.bin") == first + second


def test_names_returns_copy():
    reader = Xp3Reader(build_archive(FILES))
    names = reader.names()
    names.clear()
    assert len(reader.names()) == len(FILES)


def test_missing_name_raises_key_error():
    reader = Xp3Reader(build_archive(FILES))
    with pytest.raises(KeyError):
        reader.extract("nope.txt", io.BytesIO())


def test_not_xp3_raises():
    with pytest.raises(Xp3FormatError):
        Xp3Reader(io.BytesIO(b"PK\x03\x04 definitely not xp3"))


def test_empty_archive_has_no_names():
    reader = Xp3Reader(build_archive([], compress_index=False))
    assert reader.names() == []