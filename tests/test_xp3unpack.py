from pathlib import Path

import pytest

from krkrtools.xp3_models import Xp3FormatError
from krkrtools.xp3pack import pack
from krkrtools.xp3unpack import main, unpack

CONTENTS = {
    "game/script/start.ks": b"[wait time=100]\n" * 50,
    "game/image/bg.png": bytes(range(200)) * 4,
}


@pytest.fixture
def archive(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name, data in CONTENTS.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    target = Path("game.xp3")
    pack("game", target)
    return target


def test_unpack_to_given_directory(archive):
    written = unpack(archive, "out")
    assert sorted(name for name, _ in written) == sorted(CONTENTS)
    for name, data in CONTENTS.items():
        assert (Path("out") / name).read_bytes() == data


def test_unpack_default_directory_is_stem(tmp_path, archive):
    written = unpack(archive)
    for name, path in written:
        assert path == Path("game") / name
        assert path.read_bytes() == CONTENTS[name]


def test_unpack_uncompressed_archive(tmp_path, archive):
    pack("game", Path("plain.xp3"), compress_files=False, compress_index=False, keep_dirs=False)
    written = dict(unpack("plain.xp3", "plain"))
    assert sorted(written) == ["bg.png", "start.ks"]
    assert written["start.ks"].read_bytes() == CONTENTS["game/script/start.ks"]


def test_missing_input(archive):
    with pytest.raises(FileNotFoundError):
        unpack("absent.xp3", "out")


def test_directory_input(archive):
    with pytest.raises(ValueError):
        unpack("game", "out")


def test_not_an_xp3_file(archive):
    Path("bogus.xp3").write_bytes(b"this is not an archive at all")
    with pytest.raises(Xp3FormatError):
        unpack("bogus.xp3", "out")


def test_main_extracts(archive, capsys):
    assert main([str(archive), "-o", "cli"]) == 0
    for name, data in CONTENTS.items():
        assert (Path("cli") / name).read_bytes() == data
    assert "game/script/start.ks" in capsys.readouterr().out


def test_main_reports_missing_input(archive):
    assert main(["absent.xp3"]) == 1