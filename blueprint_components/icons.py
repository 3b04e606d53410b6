from pathlib import Path
from typing import Optional, Tuple

LANGUAGE_MAP = {
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.ts': 'typescript',
    '.tsx': 'typescript',
    '.py': 'python',
    '.html': 'html',
    '.css': 'css',
    '.scss': 'scss',
    '.json': 'json',
    '.md': 'markdown',
    '.go': 'go',
    '.rs': 'rust',
    '.java': 'java',
    '.c': 'c',
    '.cpp': 'cpp',
    '.h': 'c',
    '.rb': 'ruby',
    '.php': 'php',
    '.sh': 'shell',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.toml': 'toml',
    '.sql': 'sql',
}

# (icon, rich style) per suffix
FILE_ICONS = {
    '.go': ("◆ ", "cyan"),
    '.md': ("📄 ", "grey70"),
    '.yaml': ("📄 ", "yellow"),
    '.yml': ("📄 ", "yellow"),
}
DEFAULT_FILE_ICON = ("$ ", "grey50")
FOLDER_OPEN = ("📂 ", "blue")
FOLDER_CLOSED = ("📁 ", "blue")


def detect_language(file_name) -> Optional[str]:
    """Detect the programming language based on file extension"""
    extension = Path(file_name).suffix.lower()
    return LANGUAGE_MAP.get(extension, None)


def icon_for(name: str, is_directory: bool = False, is_open: bool = True) -> Tuple[str, str]:
    if is_directory:
        return FOLDER_OPEN if is_open else FOLDER_CLOSED
    return FILE_ICONS.get(Path(name).suffix.lower(), DEFAULT_FILE_ICON)
