# python
"""
tests/test_filesystem.py
Unit tests for the FileSystem facade: navigation, creation, read/write, removal and listings.
"""
import pytest

from hackerfs import AlreadyExists, FileSystem, NoSuchFileOrDirectory, NotEmpty


@pytest.fixture
def fs() -> FileSystem:
    return FileSystem()


def test_starts_at_root(fs: FileSystem) -> None:
    assert fs.working_directory is fs.root
    assert fs.working_directory_path() == "/"
    assert fs.root.name == ""


def test_enter_and_leave_restore_path(fs: FileSystem) -> None:
    fs.create_directory("a")
    fs.enter("a")
    fs.create_directory("b")
    before = fs.working_directory_path()
    fs.enter("b")
    assert fs.working_directory_path() == "/a/b/"
    fs.leave()
    assert fs.working_directory_path() == before


def test_leave_at_root_is_noop(fs: FileSystem) -> None:
    fs.leave()
    fs.leave()
    assert fs.working_directory is fs.root


def test_enter_root_resets_cursor(fs: FileSystem) -> None:
    fs.create_directory("a")
    fs.enter("a")
    fs.create_directory("b")
    fs.enter("b")
    fs.enter_root()
    assert fs.working_directory_path() == "/"


def test_enter_missing_name_fails(fs: FileSystem) -> None:
    with pytest.raises(NoSuchFileOrDirectory) as excinfo:
        fs.enter("nope")
    assert excinfo.value.name == "nope"
    assert fs.working_directory is fs.root


def test_enter_file_is_reported_as_missing(fs: FileSystem) -> None:
    fs.create_file("f")
    with pytest.raises(NoSuchFileOrDirectory):
        fs.enter("f")
    assert fs.working_directory is fs.root


def test_create_collision_fails_regardless_of_type(fs: FileSystem) -> None:
    fs.create_directory("x")
    with pytest.raises(AlreadyExists):
        fs.create_file("x")
    with pytest.raises(AlreadyExists):
        fs.create_directory("x")
    assert [child.name for child in fs.root.children] == ["x"]


def test_created_nodes_are_parented_to_working_directory(fs: FileSystem) -> None:
    d = fs.create_directory("d")
    fs.enter("d")
    f = fs.create_file("f")
    assert d.parent is fs.root
    assert f.parent is d
    assert f.path() == "/d/f"


@pytest.mark.parametrize("content", ["", "hi", "line one\nline two", "ünïcödé"])
def test_write_then_read_returns_content(fs: FileSystem, content: str) -> None:
    fs.create_file("f")
    fs.write_file("f", content)
    assert fs.read_file("f") == content


def test_write_overwrites(fs: FileSystem) -> None:
    fs.create_file("f")
    fs.write_file("f", "first version")
    fs.write_file("f", "v2")
    assert fs.read_file("f") == "v2"


def test_unwritten_file_reads_empty(fs: FileSystem) -> None:
    fs.create_file("f")
    assert fs.read_file("f") == ""


def test_read_and_write_missing_fail(fs: FileSystem) -> None:
    with pytest.raises(NoSuchFileOrDirectory):
        fs.read_file("missing")
    with pytest.raises(NoSuchFileOrDirectory):
        fs.write_file("missing", "x")


def test_read_and_write_directory_fail(fs: FileSystem) -> None:
    fs.create_directory("d")
    with pytest.raises(NoSuchFileOrDirectory):
        fs.read_file("d")
    with pytest.raises(NoSuchFileOrDirectory):
        fs.write_file("d", "x")


def test_remove_guard(fs: FileSystem) -> None:
    fs.create_directory("d")
    fs.enter("d")
    fs.create_file("f")
    fs.leave()
    with pytest.raises(NotEmpty):
        fs.remove("d")
    assert fs.root.lookup("d") is not None
    fs.enter("d")
    fs.remove("f")
    fs.leave()
    fs.remove("d")
    assert fs.root.children == []


def test_remove_missing_fails(fs: FileSystem) -> None:
    with pytest.raises(NoSuchFileOrDirectory):
        fs.remove("missing")


def test_removed_file_is_orphaned(fs: FileSystem) -> None:
    f = fs.create_file("f")
    fs.remove("f")
    assert f.parent is None
    with pytest.raises(NoSuchFileOrDirectory):
        fs.read_file("f")


def test_list_long_format(fs: FileSystem) -> None:
    fs.create_file("a.txt")
    fs.write_file("a.txt", "hi")
    fs.create_directory("b")
    out = fs.list_long()
    assert "f a.txt (size 2)" in out.splitlines()
    assert "d b (empty)" in out.splitlines()


def test_list_recurses_without_sorting(fs: FileSystem) -> None:
    fs.create_file("z")
    fs.create_directory("m")
    fs.enter("m")
    fs.create_file("inner")
    fs.leave()
    fs.create_file("a")
    assert fs.list() == "z\nm\ninner\na\n"


def test_find_filtering(fs: FileSystem) -> None:
    fs.create_file("report.txt")
    fs.create_file("notes.md")
    assert fs.find("report").splitlines() == ["/report.txt"]
    assert fs.find().splitlines() == ["/report.txt", "/notes.md"]


def test_traversals_are_relative_to_working_directory(fs: FileSystem) -> None:
    fs.create_directory("d")
    fs.create_file("top")
    fs.enter("d")
    fs.create_file("inner.txt")
    assert fs.list() == "inner.txt\n"
    assert fs.find() == "/d/inner.txt\n"
    assert fs.list_long() == "f inner.txt (size 0)\n"
