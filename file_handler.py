# Module for file system operations (URL to mirror path mapping, saving, copying)

import os
import re
import shutil
import logging
import constants # Import constants
from errors import PathExtractionError, DirectoryCreationError, FileWriteError, FileCopyError

_MIRROR_URL_RE = re.compile(constants.MIRROR_URL_PATTERN)


# --- URL Mapping ---
def map_to_directory(url):
    """
    Strips the scheme and the last path segment from an absolute URL and returns
    what lies between them (host plus intermediate path), e.g.
    'https://www.example.com/foo/bar/baz' -> 'www.example.com/foo/bar'.

    Raises PathExtractionError when the URL has no http(s) scheme, has no leaf
    segment after the host, has an empty host or empty segment, or contains
    '.'/'..' segments (leaf included).
    """
    match = _MIRROR_URL_RE.match(url or "")
    if not match:
        logging.error(f"Can't extract path from URL {url}")
        raise PathExtractionError(f"can't extract path from URL {url}", url=url)

    directory, leaf = match.group(1), match.group(2)
    # An empty first segment is an empty host: the path would be absolute
    if any(part in ('', '.', '..') for part in directory.split('/')) or leaf in ('.', '..'):
        logging.error(f"Refusing empty or dot segments in URL {url}")
        raise PathExtractionError(f"URL {url} contains empty or relative path segments", url=url)
    return directory


def leaf_name(url):
    """Returns the part of the URL after the last '/', or the URL itself if it has none."""
    return url.rsplit('/', 1)[-1]


# --- Internal Utilities ---
def _mirror_path(mirror_root, *parts):
    # URL directories always use '/', normalise to the host separator
    return os.path.join(mirror_root, *(part.replace('/', os.sep) for part in parts))


def _check_inside_root(full_path, mirror_root, url):
    """Raises PathExtractionError unless full_path resolves strictly under mirror_root."""
    root = os.path.abspath(mirror_root)
    target = os.path.abspath(full_path)
    if target == root or os.path.commonpath([root, target]) != root:
        logging.error(f"Mirror path {full_path} for URL {url} escapes {mirror_root}")
        raise PathExtractionError(f"URL {url} maps outside the mirror root", url=url)
    return full_path


def ensure_directory(directory, url=None):
    """Creates the directory (and parents) if needed. Raises DirectoryCreationError."""
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        logging.error(f"Path {directory} can't be created for URL {url}: {e}")
        raise DirectoryCreationError(f"path {directory} can't be created: {e}", url=url) from e
    return directory


def page_directory(page_url, mirror_root):
    """Returns the mirror directory of a page without creating it."""
    return _mirror_path(mirror_root, map_to_directory(page_url))


def asset_directory(asset_url, page_url, mirror_root):
    """Returns '<page dir>/assets/<asset host and path>' without creating it."""
    page_dir = map_to_directory(page_url)
    asset_dir = map_to_directory(asset_url)
    return _mirror_path(mirror_root, page_dir, constants.ASSETS_DIR_NAME, asset_dir)


# --- File Saving ---
def write_page(html_content, page_url, mirror_root):
    """
    Writes a composed page document to its mirror location.
    Returns the path of the written file.
    """
    page_dir = page_directory(page_url, mirror_root)
    full_path = _check_inside_root(os.path.join(page_dir, leaf_name(page_url)), mirror_root, page_url)
    ensure_directory(page_dir, url=page_url)

    try:
        with open(full_path, 'w', encoding='utf-8') as f:
            f.write(html_content)
    except OSError as e:
        logging.error(f"Error writing file {full_path}: {e}")
        raise FileWriteError(f"can't write {full_path}: {e}", url=page_url) from e

    logging.info(f"Successfully saved page: {full_path}")
    return full_path


# --- Asset Saving ---
def copy_asset(source_path, asset_url, page_url, mirror_root):
    """
    Copies an already-downloaded asset next to the page that referenced it.
    Returns the path of the copied file.
    """
    target_dir = asset_directory(asset_url, page_url, mirror_root)
    full_path = _check_inside_root(os.path.join(target_dir, leaf_name(asset_url)), mirror_root, asset_url)
    ensure_directory(target_dir, url=asset_url)

    logging.debug(f"Copying {source_path} to {full_path}")
    try:
        shutil.copy(source_path, full_path)
    except OSError as e:
        logging.error(f"Error copying asset {source_path} to {full_path}: {e}")
        raise FileCopyError(f"can't copy {source_path} to {full_path}: {e}", url=asset_url) from e

    logging.info(f"Successfully saved asset: {full_path}")
    return full_path
