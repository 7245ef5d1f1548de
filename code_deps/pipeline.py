"""Pipeline orchestrator: catalog -> analyze -> graph -> cycles."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable

from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.models import AnalyzerConfig, DependencyGraph, ProjectStructure
from code_deps.scanner import ProjectScanner


ProgressCallback = Callable[[str, int, int], None]


@dataclass
class AnalysisResult:
    structure: ProjectStructure
    graph: DependencyGraph
    cycles: list[list[str]] = field(default_factory=list)


def _stage(progress: ProgressCallback | None, stage: str) -> Callable[[float], None] | None:
    if progress is None:
        return None

    def report(percent: float) -> None:
        progress(stage, round(percent), 100)

    return report


async def scan_async(config: AnalyzerConfig, progress: ProgressCallback | None = None) -> ProjectStructure:
    return await ProjectScanner(config).scan_workspace(_stage(progress, "Scanning"))


def run_scan(config: AnalyzerConfig, progress: ProgressCallback | None = None) -> ProjectStructure:
    """Stage 1: Catalog the workspace."""
    return asyncio.run(scan_async(config, progress))


async def analyze_async(
    config: AnalyzerConfig,
    progress: ProgressCallback | None = None,
    analyzer: DependencyAnalyzer | None = None,
) -> AnalysisResult:
    analyzer = analyzer or DependencyAnalyzer(config)
    structure = await scan_async(config, progress)
    graph = await analyzer.build_dependency_graph(structure, _stage(progress, "Analyzing"))

    if progress:
        progress("Detecting cycles", 0, 1)
    cycles = await asyncio.to_thread(analyzer.find_circular_dependencies, graph)
    if progress:
        progress("Detecting cycles", 1, 1)

    return AnalysisResult(structure=structure, graph=graph, cycles=cycles)


def run_analysis(
    config: AnalyzerConfig,
    progress: ProgressCallback | None = None,
    analyzer: DependencyAnalyzer | None = None,
) -> AnalysisResult:
    """Run the full pipeline. A failure leaves no usable partial graph."""
    return asyncio.run(analyze_async(config, progress, analyzer))
