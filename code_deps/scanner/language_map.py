"""Shared extension-to-file-type mapping for the catalog and the extractors."""

from __future__ import annotations

import os

from code_deps.models import FileType

EXT_TO_FILE_TYPE: dict[str, FileType] = {
    ".js": FileType.SCRIPT,
    ".jsx": FileType.SCRIPT,
    ".mjs": FileType.SCRIPT,
    ".ts": FileType.SCRIPT,
    ".tsx": FileType.SCRIPT,
    ".html": FileType.MARKUP,
    ".htm": FileType.MARKUP,
    ".xhtml": FileType.MARKUP,
    ".css": FileType.STYLESHEET,
    ".scss": FileType.STYLESHEET,
    ".less": FileType.STYLESHEET,
    ".json": FileType.STRUCTURED_DATA,
    ".md": FileType.PROSE,
    ".markdown": FileType.PROSE,
    ".png": FileType.IMAGE,
    ".jpg": FileType.IMAGE,
    ".jpeg": FileType.IMAGE,
    ".gif": FileType.IMAGE,
    ".svg": FileType.IMAGE,
}

# Never read for dependency extraction
BINARY_EXTENSIONS: frozenset[str] = frozenset({
    ".pdf", ".zip", ".gz", ".tar",
    ".exe", ".dll", ".so", ".dylib",
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".ico",
    ".mp3", ".mp4", ".wav", ".avi", ".mkv",
    ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
})


def determine_file_type(path: str) -> FileType:
    ext = os.path.splitext(path)[1].lower()
    return EXT_TO_FILE_TYPE.get(ext, FileType.UNKNOWN)
