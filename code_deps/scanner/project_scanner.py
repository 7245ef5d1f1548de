"""Workspace catalog — concurrent directory walk producing FileInfo records."""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable

from code_deps.errors import WorkspaceNotAvailable
from code_deps.models import (
    AnalyzerConfig,
    DirectoryInfo,
    FileInfo,
    FilterCriteria,
    ProjectStructure,
)
from code_deps.scanner.language_map import determine_file_type

logger = logging.getLogger(__name__)

PercentCallback = Callable[[float], None]


def describe_file(path: str, workspace_root: str | None = None, relative_dir: str | None = None) -> FileInfo:
    """Stat *path* and build its FileInfo (content not loaded).

    Raises ``OSError`` when the file cannot be stat'ed.
    """
    st = os.stat(path)
    name = os.path.basename(path)
    if relative_dir is not None:
        relative_path = os.path.join(relative_dir, name)
    elif workspace_root:
        relative_path = os.path.relpath(path, workspace_root)
    else:
        relative_path = path
    return FileInfo(
        path=path,
        relative_path=relative_path,
        name=name,
        extension=os.path.splitext(name)[1].lower(),
        type=determine_file_type(path),
        size=st.st_size,
        last_modified=datetime.fromtimestamp(st.st_mtime),
    )


class ProgressCounter:
    """Serialises progress updates coming from concurrent tasks."""

    def __init__(self, total: int, callback: PercentCallback | None):
        self.total = total
        self.callback = callback
        self.done = 0
        self._lock = threading.Lock()

    def step(self) -> None:
        with self._lock:
            self.done += 1
            percent = (self.done / self.total) * 100 if self.total else 100.0
        if self.callback:
            self.callback(percent)


class ProjectScanner:
    """Enumerate the files of a workspace, honouring exclusion lists."""

    def __init__(self, config: AnalyzerConfig):
        self.config = config
        self.workspace_root = config.workspace_root
        self.excluded_folders = set(config.excluded_folders)
        self.excluded_files = list(config.excluded_files)

    def _require_root(self) -> str:
        if not self.workspace_root:
            raise WorkspaceNotAvailable()
        if not os.path.isdir(self.workspace_root):
            raise WorkspaceNotAvailable(self.workspace_root)
        return self.workspace_root

    async def scan_workspace(self, progress: PercentCallback | None = None) -> ProjectStructure:
        """Scan the whole workspace.

        Every root entry is processed concurrently; *progress* receives the
        percentage of root entries finished, ending at 100.
        """
        root = self._require_root()
        structure = ProjectStructure(workspace_root=root)

        entries = await asyncio.to_thread(_list_dir, root)
        counter = ProgressCounter(len(entries), progress)

        async def process(entry: os.DirEntry) -> None:
            try:
                # Links are not followed, so aliases and loops are never walked
                is_dir = entry.is_dir(follow_symlinks=False)
                if is_dir and entry.name in self.excluded_folders:
                    return
                if not is_dir and self.should_exclude_file(entry.name):
                    return
                if is_dir:
                    dir_info = await self._scan_directory(entry.path, entry.name, "")
                    structure.root_directories.append(dir_info)
                    _collect_all_files(dir_info, structure.all_files)
                elif entry.is_file(follow_symlinks=False):
                    file_info = await asyncio.to_thread(describe_file, entry.path, None, "")
                    structure.root_files.append(file_info)
                    structure.all_files.append(file_info)
            except OSError as e:
                logger.warning("Skipping %s: %s", entry.path, e)
            finally:
                counter.step()

        await asyncio.gather(*(process(e) for e in entries))
        return structure

    async def _scan_directory(self, dir_path: str, dir_name: str, relative_path: str) -> DirectoryInfo:
        dir_relative = os.path.join(relative_path, dir_name)
        dir_info = DirectoryInfo(path=dir_path, relative_path=dir_relative, name=dir_name)

        entries = await asyncio.to_thread(_list_dir, dir_path)

        async def process(entry: os.DirEntry) -> None:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name in self.excluded_folders:
                        return
                    dir_info.directories.append(
                        await self._scan_directory(entry.path, entry.name, dir_relative)
                    )
                elif entry.is_file(follow_symlinks=False) and not self.should_exclude_file(entry.name):
                    dir_info.files.append(
                        await asyncio.to_thread(describe_file, entry.path, None, dir_relative)
                    )
            except OSError as e:
                logger.warning("Skipping %s: %s", entry.path, e)

        await asyncio.gather(*(process(e) for e in entries))
        return dir_info

    def should_exclude_file(self, file_name: str) -> bool:
        for pattern in self.excluded_files:
            if "*" in pattern:
                if fnmatch.fnmatch(file_name, pattern):
                    return True
            elif pattern == file_name:
                return True
        return False

    def _absolute(self, file_path: str) -> str:
        if os.path.isabs(file_path):
            return file_path
        return os.path.join(self._require_root(), file_path)

    def get_file_info(self, file_path: str) -> FileInfo:
        return describe_file(self._absolute(file_path), self.workspace_root)

    def get_file_details(self, file_path: str) -> FileInfo:
        """Describe a single file and load its content when small enough."""
        info = self.get_file_info(file_path)
        if info.size > self.config.max_file_size:
            return info
        try:
            content = Path(info.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Error reading file %s: %s", info.path, e)
            return info
        return info.with_content(content)

    async def filter_files(self, criteria: FilterCriteria) -> list[str]:
        """Rescan the workspace and return paths of files matching *criteria*."""
        structure = await self.scan_workspace()
        return [f.path for f in structure.all_files if _matches(f, criteria)]


def _list_dir(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return list(it)


def _collect_all_files(dir_info: DirectoryInfo, all_files: list[FileInfo]) -> None:
    all_files.extend(dir_info.files)
    for sub in dir_info.directories:
        _collect_all_files(sub, all_files)


def _matches(file: FileInfo, criteria: FilterCriteria) -> bool:
    if criteria.extensions and file.extension not in criteria.extensions:
        return False
    if criteria.max_size is not None and file.size > criteria.max_size:
        return False
    if criteria.modified_since and file.last_modified < criteria.modified_since:
        return False
    for pattern in criteria.exclude_patterns or []:
        if pattern.endswith("*"):
            if file.relative_path.startswith(pattern[:-1]):
                return False
        elif pattern == file.relative_path:
            return False
    return True
