from pathlib import Path

from krkrtools.pathtool import list_files, normalize_archive_name


def _make_tree(root: Path) -> None:
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "top.txt").write_bytes(b"t")
    (root / "sub" / "a.txt").write_bytes(b"a")
    (root / "sub" / "deep" / "b.txt").write_bytes(b"b")


def test_list_files_finds_all_files(tmp_path):
    _make_tree(tmp_path)
    found = {p.relative_to(tmp_path).as_posix() for p in list_files(tmp_path)}
    assert found == {"top.txt", "sub/a.txt", "sub/deep/b.txt"}


def test_list_files_excludes_directories(tmp_path):
    _make_tree(tmp_path)
    assert all(p.is_file() for p in list_files(tmp_path))


def test_list_files_single_file(tmp_path):
    target = tmp_path / "only.bin"
    target.write_bytes(b"x")
    assert list_files(target) == [target]


def test_list_files_missing_path(tmp_path):
    assert list_files(tmp_path / "absent") == []


def test_list_files_strips_current_dir_prefix(tmp_path, monkeypatch):
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    found = {p.as_posix() for p in list_files("./sub")}
    assert found == {"sub/a.txt", "sub/deep/b.txt"}


def test_normalize_backslashes():
    assert normalize_archive_name("a\\b\\c.txt") == "a/b/c.txt"


def test_normalize_strips_leading_dot_slash():
    assert normalize_archive_name("./x/y.txt") == "x/y.txt"
    assert normalize_archive_name(".\\x.txt") == "x.txt"


def test_normalize_keeps_inner_dot():
    assert normalize_archive_name("x/./y") == "x/./y"