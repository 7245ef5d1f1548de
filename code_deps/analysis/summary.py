"""Human-readable dependency report for a single file."""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

from code_deps.models import Dependency, DependencyType
from code_deps.scanner import describe_file

if TYPE_CHECKING:
    from code_deps.analysis.dependency_graph import DependencyAnalyzer


def _relative(path: str, workspace_root: str | None) -> str:
    return os.path.relpath(path, workspace_root) if workspace_root else path


def _format_lines(dep: Dependency) -> str:
    if not dep.line_numbers:
        return ""
    label = "lines" if len(dep.line_numbers) > 1 else "line"
    return f" ({label} {', '.join(str(n + 1) for n in dep.line_numbers)})"


def render_summary(
    file_name: str,
    dependencies: list[Dependency],
    cycles: list[list[str]],
    workspace_root: str | None = None,
) -> str:
    """Render the summary text.

    Dependencies are grouped by kind in first-seen order, internal before
    external; line numbers are printed 1-based.
    """
    by_type: dict[DependencyType, list[Dependency]] = {}
    for dep in dependencies:
        by_type.setdefault(dep.type, []).append(dep)

    out = [f"Dependency Summary for {file_name}:\n\n"]

    for dep_type, deps in by_type.items():
        out.append(f"{dep_type.value} Dependencies ({len(deps)}):\n")

        internal = [d for d in deps if not d.is_external]
        external = [d for d in deps if d.is_external]

        if internal:
            out.append("  Internal:\n")
            for dep in internal:
                out.append(f"    - {_relative(dep.target, workspace_root)}{_format_lines(dep)}\n")
        if external:
            out.append("  External:\n")
            for dep in external:
                out.append(f"    - {dep.target}{_format_lines(dep)}\n")

        out.append("\n")

    if cycles:
        out.append("\nCircular Dependencies Found:\n")
        for cycle in cycles:
            out.append("↻ " + " → ".join(_relative(p, workspace_root) for p in cycle) + "\n")

    return "".join(out)


async def generate_dependency_summary(analyzer: DependencyAnalyzer, file_path: str) -> str:
    """Summarise the dependencies of *file_path*.

    The cycle check only sees the single-file graph, so it reports
    self-references.
    """
    absolute = analyzer.absolute_path(file_path)
    info = await asyncio.to_thread(describe_file, absolute, analyzer.workspace_root)
    dependencies = await asyncio.to_thread(analyzer.analyze_dependencies, info)

    graph = await analyzer.build_dependency_graph([info])
    cycles = analyzer.find_circular_dependencies(graph)

    return render_summary(
        os.path.basename(file_path), dependencies, cycles, analyzer.workspace_root,
    )
