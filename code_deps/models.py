"""Data models for the code-deps analyzer."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator


class FileType(enum.Enum):
    SCRIPT = "script"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"
    STRUCTURED_DATA = "structured-data"
    PROSE = "prose"
    IMAGE = "image"
    UNKNOWN = "unknown"


class DependencyType(enum.Enum):
    IMPORT = "import"
    EXPORT = "export"
    REFERENCE = "reference"
    USAGE = "usage"
    STYLE_IMPORT = "style-import"
    MARKUP_LINK = "markup-link"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FileInfo:
    """A file found by the catalog. ``path`` is absolute and unique."""
    path: str
    relative_path: str
    name: str
    extension: str
    type: FileType
    size: int
    last_modified: datetime
    content: str | None = None

    def with_content(self, content: str | None) -> FileInfo:
        return dataclasses.replace(self, content=content)


@dataclass
class Dependency:
    """A directed reference ``source -> target``."""
    source: str
    target: str
    type: DependencyType
    line_numbers: list[int] = field(default_factory=list)  # zero-based
    is_external: bool = False


@dataclass
class DependencyGraph:
    nodes: dict[str, FileInfo] = field(default_factory=dict)
    edges: dict[str, dict[str, Dependency]] = field(default_factory=dict)  # source -> {target: dep}

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())

    def iter_edges(self) -> Iterator[Dependency]:
        for targets in self.edges.values():
            yield from targets.values()


@dataclass
class DirectoryInfo:
    path: str
    relative_path: str
    name: str
    files: list[FileInfo] = field(default_factory=list)
    directories: list[DirectoryInfo] = field(default_factory=list)


@dataclass
class ProjectStructure:
    """Result from the catalog stage."""
    workspace_root: str
    root_directories: list[DirectoryInfo] = field(default_factory=list)
    root_files: list[FileInfo] = field(default_factory=list)
    all_files: list[FileInfo] = field(default_factory=list)


@dataclass
class FilterCriteria:
    extensions: list[str] | None = None
    exclude_patterns: list[str] | None = None
    max_size: int | None = None
    modified_since: datetime | None = None


DEFAULT_MAX_FILE_SIZE = 1024 * 1024


@dataclass
class AnalyzerConfig:
    """Configuration for the catalog and the dependency analyzer."""
    workspace_root: str | None = None
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    external_patterns: list[str] = field(default_factory=lambda: [
        "node_modules",
        "https://cdn", "http://cdn",
        "https://unpkg.com", "https://jsdelivr.com",
    ])
    # External URL prefixes that are still resolved and recorded
    process_external: list[str] = field(default_factory=list)
    excluded_folders: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "dist", "out", "build",
        "coverage", ".vscode-test", ".vscode",
    ])
    excluded_files: list[str] = field(default_factory=lambda: [
        "package-lock.json", "yarn.lock", "*.log",
    ])
