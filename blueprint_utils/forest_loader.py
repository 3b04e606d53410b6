"""
Data sources for the tree: a JSON document or a directory on disk.

Both hand back a forest (list of root nodes) that the viewer treats as
immutable for the rest of the session.
"""
import fnmatch
import json
import logging
import mimetypes
import os
from pathlib import Path
from typing import List, Optional, Set, Union

from pydantic import TypeAdapter, ValidationError

from blueprint_components.icons import detect_language
from blueprint_types.types import Node

logger = logging.getLogger(__name__)

IGNORE_DIRS = {
    '.git', '.svn', '.hg', 'node_modules', '__pycache__',
    '.venv', 'venv', 'env', 'dist', 'build', '.next',
    '.idea', '.vscode', '.pytest_cache', '.mypy_cache'
}

IGNORE_FILES = {
    '*.pyc', '*.pyo', '*.dll', '*.obj', '*.o', '*.a', '*.lib',
    '*.so', '*.dylib', '*.ncb', '*.sdf', '*.suo', '*.pdb',
    '*.idb', '.DS_Store', '*.class', '*.psd', '*.db', '*.jpg',
    '*.jpeg', '*.png', '*.gif', '*.svg', '*.eot', '*.ttf',
    '*.woff', '*.mp4', '*.mp3', '*.lock', 'package-lock.json'
}

MAX_FILE_SIZE = 500 * 1024
BINARY_PLACEHOLDER = "Binary file content..."

_forest_adapter = TypeAdapter(List[Node])


class ForestLoadError(Exception):
    """The data source could not produce a forest."""


def parse_forest(document) -> List[Node]:
    """Validate an already decoded document: a list of nodes or {"root": [...]}."""
    if isinstance(document, dict) and "root" in document:
        document = document["root"]
    try:
        return _forest_adapter.validate_python(document)
    except ValidationError as e:
        raise ForestLoadError(f"Invalid forest document: {e}") from e


def load_forest(path: Union[str, Path]) -> List[Node]:
    """Load a forest from a JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except OSError as e:
        raise ForestLoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ForestLoadError(f"{path} is not valid JSON: {e}") from e
    forest = parse_forest(document)
    logger.info("loaded %d root node(s) from %s", len(forest), path)
    return forest


def is_binary_file(file_path) -> bool:
    """Check if a file is binary"""
    mime_type, _ = mimetypes.guess_type(str(file_path))
    if mime_type is None:
        # Read the first chunk of the file to check for binary content
        try:
            with open(file_path, 'rb') as f:
                chunk = f.read(1024)
                return b'\0' in chunk
        except OSError:
            return True
    return mime_type.startswith(('image/', 'audio/', 'video/', 'application/')) and not mime_type.endswith(('json', 'xml', 'javascript', 'html'))


def _read_content(full_path: str, max_file_size: int) -> str:
    if is_binary_file(full_path):
        return BINARY_PLACEHOLDER
    size = os.path.getsize(full_path)
    if size > max_file_size:
        return f"File too large ({size} bytes)..."
    try:
        with open(full_path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        return BINARY_PLACEHOLDER


def scan_directory(
    directory_path: Union[str, Path],
    ignore_dirs: Optional[Set[str]] = None,
    ignore_files: Optional[Set[str]] = None,
    max_file_size: int = MAX_FILE_SIZE,
) -> List[Node]:
    """
    Scan a directory and create a hierarchical forest of files and folders.

    Args:
        directory_path: Path to the directory to scan
        ignore_dirs: Set of directory names to ignore
        ignore_files: Set of file patterns to ignore
        max_file_size: Maximum file size to read content (in bytes)

    Returns:
        The children of directory_path as nodes, entries sorted by name.
    """
    if ignore_dirs is None:
        ignore_dirs = IGNORE_DIRS
    if ignore_files is None:
        ignore_files = IGNORE_FILES

    try:
        entries = sorted(os.listdir(directory_path))
    except PermissionError:
        # If we can't access the directory, show it as empty
        logger.warning("permission denied scanning %s", directory_path)
        return []
    except OSError as e:
        raise ForestLoadError(f"Cannot scan {directory_path}: {e}") from e

    result = []
    for entry in entries:
        full_path = os.path.join(directory_path, entry)

        if os.path.isdir(full_path):
            if entry in ignore_dirs:
                continue
            children = scan_directory(full_path, ignore_dirs, ignore_files, max_file_size)
            result.append(Node.directory(entry, children))
            continue

        if any(fnmatch.fnmatch(entry, pattern) for pattern in ignore_files):
            continue
        try:
            content = _read_content(full_path, max_file_size)
        except OSError as e:
            content = f"Error reading file: {e}"
        result.append(Node.file(entry, content, language=detect_language(entry)))

    return result


def scan_project(directory_path: Union[str, Path]) -> List[Node]:
    """Forest with the scanned directory itself as the single root."""
    root = Path(directory_path).resolve()
    if not root.is_dir():
        raise ForestLoadError(f"{directory_path} is not a directory")
    return [Node.directory(root.name or str(root), scan_directory(root))]
