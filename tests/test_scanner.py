import os

import pytest

from pixorder_app.core.errors import (
    FolderNotADirectoryError,
    InvalidFolderPathError,
    ScanError,
)
from pixorder_app.core.scanner import MediaScanner


@pytest.fixture
def media_tree(tmp_path):
    root = tmp_path / "photos"
    (root / "trip").mkdir(parents=True)
    (root / ".cache").mkdir()
    for rel in (
        "c.jpg",
        "A.png",
        "b.mov",
        "notes.txt",
        ".hidden.jpg",
        "trip/a_beach.jpg",
        ".cache/thumb.jpg",
    ):
        (root / rel).write_bytes(b"x")
    return root


def test_top_level_only(media_tree):
    files = MediaScanner().scan_folder(media_tree, include_subfolders=False)
    assert [p.name for p in files] == ["A.png", "b.mov", "c.jpg"]


def test_recursive_sorted_by_name(media_tree):
    files = MediaScanner().scan_folder(media_tree)
    assert [p.name for p in files] == ["A.png", "a_beach.jpg", "b.mov", "c.jpg"]
    assert media_tree / "trip" / "a_beach.jpg" in files


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_skipped(media_tree):
    os.symlink(media_tree / "c.jpg", media_tree / "link.jpg")
    names = [p.name for p in MediaScanner().scan_folder(media_tree)]
    assert "link.jpg" not in names


def test_missing_folder(tmp_path):
    with pytest.raises(InvalidFolderPathError):
        MediaScanner().scan_folder(tmp_path / "nope")


def test_blank_path():
    with pytest.raises(InvalidFolderPathError):
        MediaScanner().scan_folder("  ")


def test_file_instead_of_folder(tmp_path):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"x")
    with pytest.raises(FolderNotADirectoryError) as exc_info:
        MediaScanner().scan_folder(path)
    assert isinstance(exc_info.value, ScanError)
    assert exc_info.value.path == path


def test_empty_folder(tmp_path):
    assert MediaScanner().scan_folder(tmp_path) == []
