import pytest
import os
import sys
from unittest.mock import patch

# Add project root to sys.path to allow importing project modules
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import file_handler
import constants
from errors import PathExtractionError, DirectoryCreationError, FileWriteError, FileCopyError

PAGE_URL = "https://uh.com/ma/super/page/page_a_sauver.html"
ASSET_URL = "https://assets-test.com/mon/super/asset"


# --- Tests for map_to_directory ---

@pytest.mark.parametrize("url, expected_dir", [
    ("https://www.example.com/foo/bar/baz", "www.example.com/foo/bar"),
    (PAGE_URL, "uh.com/ma/super/page"),
    ("http://example.com/page1", "example.com"), # Single segment: host only
    ("https://example.com/a/b/image.png?size=2", "example.com/a/b"),
])
def test_map_to_directory(url, expected_dir):
    assert file_handler.map_to_directory(url) == expected_dir


@pytest.mark.parametrize("url", [
    "https://example.com", # Bare host
    "https://example.com/", # No leaf after the host
    "https://example.com/dir/", # Trailing slash, no leaf
    "example.com/foo/bar", # No scheme
    "ftp://example.com/foo/bar", # Unsupported scheme
    "link1", # Relative reference
    "",
    "https://example.com/../../etc/passwd", # Climbs out of the mirror root
    "https://example.com/a/./b",
    "https:///etc/x", # Empty host would make the path absolute
    "https:///tmp/outside/pwned.html",
    "https://example.com//x", # Empty segment
    "https://example.com/a//b/c",
    "https://cdn.uh.com/img/..", # Dot leaf
    "https://uh.com/a/.",
])
@patch('logging.error')
def test_map_to_directory_not_mappable(mock_log_error, url):
    with pytest.raises(PathExtractionError) as e:
        file_handler.map_to_directory(url)

    assert e.value.url == url
    assert e.value.kind == "path_extraction"
    mock_log_error.assert_called_once()


# --- Tests for leaf_name ---

@pytest.mark.parametrize("url, expected_leaf", [
    (PAGE_URL, "page_a_sauver.html"),
    ("https://uh.com/ma/super/page", "page"),
    ("no-slash-at-all", "no-slash-at-all"),
    ("https://example.com/dir/", ""),
])
def test_leaf_name(url, expected_leaf):
    assert file_handler.leaf_name(url) == expected_leaf


# --- Tests for directory helpers ---

@pytest.mark.parametrize("relative_target", [
    os.path.join("..", "outside", "file.html"),
    os.path.join("uh.com", "..", "..", "file.html"),
    ".",
])
@patch('logging.error')
def test_check_inside_root_rejects_escapes(mock_log_error, tmp_path, relative_target):
    root = str(tmp_path / "mirror")

    with pytest.raises(PathExtractionError):
        file_handler._check_inside_root(os.path.join(root, relative_target), root, PAGE_URL)

    assert "escapes" in mock_log_error.call_args[0][0]


def test_check_inside_root_accepts_nested_path(tmp_path):
    root = str(tmp_path / "mirror")
    target = os.path.join(root, "uh.com", "page.html")
    assert file_handler._check_inside_root(target, root, PAGE_URL) == target


def test_asset_directory_nests_under_page(tmp_path):
    root = str(tmp_path)
    expected = os.path.join(root, "uh.com", "ma", "super", "page", constants.ASSETS_DIR_NAME,
                            "assets-test.com", "mon", "super")
    assert file_handler.asset_directory(ASSET_URL, PAGE_URL, root) == expected


def test_asset_directory_rejects_unmappable_page(tmp_path):
    with pytest.raises(PathExtractionError):
        file_handler.asset_directory(ASSET_URL, "https://uh.com", str(tmp_path))
    # Nothing was created
    assert list(tmp_path.iterdir()) == []


@patch('os.makedirs', side_effect=OSError("Permission denied"))
@patch('logging.error')
def test_ensure_directory_os_error(mock_log_error, mock_makedirs, tmp_path):
    """Tests error handling when os.makedirs fails."""
    target = str(tmp_path / "fail")

    with pytest.raises(DirectoryCreationError) as e:
        file_handler.ensure_directory(target, url=PAGE_URL)

    assert isinstance(e.value.__cause__, OSError)
    assert e.value.url == PAGE_URL
    mock_makedirs.assert_called_once_with(target, exist_ok=True)
    assert "can't be created" in mock_log_error.call_args[0][0]


# --- Tests for write_page ---

def test_write_page_creates_mirror_tree(tmp_path):
    root = str(tmp_path)

    full_path = file_handler.write_page("<html></html>", PAGE_URL, root)

    assert full_path == os.path.join(root, "uh.com", "ma", "super", "page", "page_a_sauver.html")
    with open(full_path, encoding='utf-8') as f:
        assert f.read() == "<html></html>"


def test_write_page_overwrites_existing_file(tmp_path):
    root = str(tmp_path)
    file_handler.write_page("first", PAGE_URL, root)
    full_path = file_handler.write_page("second", PAGE_URL, root)

    with open(full_path, encoding='utf-8') as f:
        assert f.read() == "second"


@patch('builtins.open', side_effect=OSError("Disk full"))
@patch('logging.error')
def test_write_page_error(mock_log_error, mock_file_open, tmp_path):
    """A failed write is reported, and the directory created before it is kept."""
    root = str(tmp_path)

    with pytest.raises(FileWriteError) as e:
        file_handler.write_page("<html></html>", PAGE_URL, root)

    assert e.value.kind == "file_write"
    assert os.path.isdir(os.path.join(root, "uh.com", "ma", "super", "page"))
    assert "Error writing file" in mock_log_error.call_args[0][0]


# --- Tests for copy_asset ---

def test_copy_asset(tmp_path):
    root = str(tmp_path / "mirror")
    source = tmp_path / "download" / "asset.txt"
    source.parent.mkdir()
    source.write_bytes(b"asset bytes")

    full_path = file_handler.copy_asset(str(source), ASSET_URL, PAGE_URL, root)

    assert full_path == os.path.join(root, "uh.com", "ma", "super", "page", "assets",
                                     "assets-test.com", "mon", "super", "asset")
    with open(full_path, 'rb') as f:
        assert f.read() == b"asset bytes"
    assert source.exists() # Copied, not moved


@patch('logging.error')
def test_copy_asset_missing_source(mock_log_error, tmp_path):
    root = str(tmp_path / "mirror")

    with pytest.raises(FileCopyError) as e:
        file_handler.copy_asset(str(tmp_path / "missing.bin"), ASSET_URL, PAGE_URL, root)

    assert e.value.url == ASSET_URL
    assert "Error copying asset" in mock_log_error.call_args[0][0]
