"""Workspace catalog."""

from __future__ import annotations

from code_deps.scanner.language_map import BINARY_EXTENSIONS, EXT_TO_FILE_TYPE, determine_file_type
from code_deps.scanner.project_scanner import ProgressCounter, ProjectScanner, describe_file

__all__ = [
    "BINARY_EXTENSIONS",
    "EXT_TO_FILE_TYPE",
    "ProgressCounter",
    "ProjectScanner",
    "describe_file",
    "determine_file_type",
]
