"""Dependency analyzer — per-file extraction, graph assembly, reverse lookups."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterable

from code_deps.analysis.cache import DependencyCache
from code_deps.analysis.cycles import find_circular_dependencies
from code_deps.analysis.resolver import ExternalPolicy, PathResolver
from code_deps.analysis.summary import generate_dependency_summary as _generate_summary
from code_deps.errors import WorkspaceNotAvailable
from code_deps.extractor import ExtractionContext, extract_dependencies
from code_deps.models import (
    AnalyzerConfig,
    Dependency,
    DependencyGraph,
    FileInfo,
    FileType,
    ProjectStructure,
)
from code_deps.scanner import BINARY_EXTENSIONS, ProgressCounter, describe_file

logger = logging.getLogger(__name__)


class DependencyAnalyzer:
    """Extract file-level dependencies and assemble them into a graph.

    One analyzer owns one :class:`DependencyCache`; a file is analysed at
    most once per analyzer even if it changes on disk afterwards.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        cache: DependencyCache | None = None,
        resolver: PathResolver | None = None,
    ):
        self.config = config
        self.workspace_root = config.workspace_root
        self.cache = cache if cache is not None else DependencyCache()
        self.resolver = resolver or PathResolver(config.workspace_root)
        self.policy = ExternalPolicy(config.external_patterns, config.process_external)
        self._context = ExtractionContext(resolver=self.resolver, policy=self.policy)

    def absolute_path(self, file_path: str) -> str:
        if os.path.isabs(file_path):
            return file_path
        if not self.workspace_root:
            raise WorkspaceNotAvailable()
        return os.path.join(self.workspace_root, file_path)

    def is_binary(self, file: FileInfo) -> bool:
        return file.type == FileType.IMAGE or file.extension in BINARY_EXTENSIONS

    def analyze_dependencies(self, file: FileInfo) -> list[Dependency]:
        """Return the dependencies of *file*, computing them at most once."""
        cached = self.cache.get(file.path)
        if cached is not None:
            return cached

        if file.size > self.config.max_file_size or self.is_binary(file):
            logger.debug("Skipping %s (binary or larger than %d bytes)", file.path, self.config.max_file_size)
            return self.cache.set_default(file.path, [])

        content = file.content
        if content is None:
            try:
                content = Path(file.path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Error reading file %s: %s", file.path, e)
                return self.cache.set_default(file.path, [])

        deps = extract_dependencies(file.path, file.type, content, self._context)
        return self.cache.set_default(file.path, deps)

    async def build_dependency_graph(
        self,
        files: ProjectStructure | Iterable[FileInfo],
        progress: Callable[[float], None] | None = None,
    ) -> DependencyGraph:
        """Build the project graph; files are analysed concurrently.

        Only edges whose target is one of *files* are kept.
        """
        all_files = files.all_files if isinstance(files, ProjectStructure) else list(files)

        graph = DependencyGraph()
        for file in all_files:
            graph.nodes[file.path] = file
            graph.edges[file.path] = {}

        counter = ProgressCounter(len(all_files), progress)

        async def analyze(file: FileInfo) -> list[Dependency]:
            deps = await asyncio.to_thread(self.analyze_dependencies, file)
            counter.step()
            return deps

        results = await asyncio.gather(*(analyze(f) for f in all_files))

        for file, deps in zip(all_files, results):
            for dep in deps:
                if dep.target in graph.nodes:
                    graph.edges[file.path][dep.target] = dep

        logger.debug("Graph built: %d nodes, %d edges", len(graph.nodes), graph.edge_count)
        return graph

    def get_file_dependencies(
        self,
        file_path: str,
        recursive: bool = False,
        max_depth: int = 3,
    ) -> list[Dependency]:
        """Dependencies of one file, optionally following internal targets.

        Raises ``OSError`` if *file_path* cannot be stat'ed.
        """
        absolute = self.absolute_path(file_path)
        info = describe_file(absolute, self.workspace_root)
        direct = self.analyze_dependencies(info)

        if not recursive or max_depth <= 0:
            return direct

        all_deps = list(direct)
        seen_pairs = {(d.source, d.target) for d in all_deps}
        processed = {absolute}

        for dep in direct:
            if dep.target in processed or dep.is_external:
                continue
            processed.add(dep.target)
            if not os.path.isfile(dep.target):
                continue
            for sub in self.get_file_dependencies(dep.target, True, max_depth - 1):
                if (sub.source, sub.target) not in seen_pairs:
                    seen_pairs.add((sub.source, sub.target))
                    all_deps.append(sub)

        return all_deps

    def get_file_reverse_dependencies(
        self,
        file_path: str,
        files: ProjectStructure | Iterable[FileInfo],
    ) -> list[str]:
        """Paths of files that depend on *file_path*.

        Walks every file on each call; nothing is kept between calls beyond
        the per-file cache.
        """
        absolute = self.absolute_path(file_path)
        all_files = files.all_files if isinstance(files, ProjectStructure) else files
        return [
            f.path for f in all_files
            if any(dep.target == absolute for dep in self.analyze_dependencies(f))
        ]

    def find_circular_dependencies(self, graph: DependencyGraph) -> list[list[str]]:
        return find_circular_dependencies(graph)

    async def generate_dependency_summary(self, file_path: str) -> str:
        return await _generate_summary(self, file_path)
