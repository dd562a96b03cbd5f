# krkrtools

Command-line tools and a small library for KiriKiri (KrKr) engine files:

- **KSD text files**: descramble script text in modes 0, 1 and 2 to UTF-8, and scramble UTF-8 text back into KSD.
- **XP3 archives**: pack a file or a directory tree into an unencrypted XP3 archive, and unpack one.
- **PSB headers**: parse and serialise the fixed header of PSB files (versions 1 to 4).

## Installation

```
pip install .
```

## Commands

### Descramble a KSD file

```
krkr-descrambler script.ksd
krkr-descrambler script.ksd -o script.txt
```

The five-byte header of the input selects the mode; an unknown header is an error. Without `-o`, the output is written next to the input with a `.txt` extension. Mode 2 output begins with a UTF-8 byte order mark. The path written is printed.

### Scramble a text file

```
krkr-scrambler script.txt 1
krkr-scrambler script.txt 0 -o script.ksd
```

The second argument is the mode: `0`, `1` or `2`. The input must be UTF-8. Without `-o`, the output is written next to the input with a `.ksd` extension.

### Pack an XP3 archive

```
xp3pack data
xp3pack data -o patch
xp3pack data --no-compress-file --no-compress-index --no-dirs
```

By default file contents and the index are zlib-compressed and each file is stored under its path with forward slashes. `-o` gives the archive name without its extension; `.xp3` is added. Without `-o`, the archive is `<input stem>.xp3` in the current directory.

- `--no-compress-file`: store file contents uncompressed
- `--no-compress-index`: store the index uncompressed
- `--no-dirs`: store only file names, without their directories

Symbolic links are not followed.

### Unpack an XP3 archive

```
xp3unpack patch.xp3
xp3unpack patch.xp3 -o extracted
```

Without `-o`, files go into a directory named after the archive's stem in the current directory.

All four commands take `--version` and exit with status 1 on an error.

## Library use

```python
from krkrtools.scrambler import scramble_bytes
from krkrtools.descrambler import descramble_bytes
from krkrtools.xp3pack import pack
from krkrtools.xp3unpack import unpack
from krkrtools.xp3_reader import Xp3Reader
from krkrtools.psb import parse_psb_header

ksd = scramble_bytes("hello".encode("utf-8"), 1)
assert descramble_bytes(ksd) == b"hello"

pack("data", "patch.xp3")          # returns (source path, archive name) pairs
unpack("patch.xp3", "extracted")   # returns (archive name, written path) pairs

with open("patch.xp3", "rb") as stream:
    reader = Xp3Reader(stream)
    for name in reader.names():
        with open(name.replace("/", "_"), "wb") as out:
            reader.extract(name, out)
```

Other modules:

- `krkrtools.scramble`: the raw transforms `scramble_mode0`, `descramble_mode0`, `scramble_mode1`, `descramble_mode1`, `compress_zlib`, `decompress_zlib`.
- `krkrtools.ksd_header`: the `Mode` enum and `file_mode(header)`.
- `krkrtools.textcodec`: `utf8_to_utf16le` and `utf16le_to_utf8`.
- `krkrtools.xp3_models`: the index structures (`FileIndexHeader`, `FileIndexInfo`, `SegmentEntry`, `FileIndexEntry`) with `to_bytes()`, and `read_index_header` / `read_index_entry`.
- `krkrtools.zlibtool`: `compress`, `decompress`, `compress_stream`, `decompress_stream`.
- `krkrtools.pathtool`: `list_files` and `normalize_archive_name`.
- `krkrtools.psb`: `PsbHeader`, `parse_psb_header`, `PsbError`.

Malformed input raises `ValueError` (or a subclass such as `Xp3FormatError` or `PsbError`); `Xp3Reader.extract` raises `KeyError` for a name that is not in the archive.

## What it does not do

- Encrypted XP3 archives cannot be read.
- Only the PSB header is handled: there is no command to build or decompile PSB/SCN scene files, and their bodies are not parsed.

## Tests

```
pip install .[test]
pytest
```