"""Click CLI with scan, graph, cycles, summary, dependents, ask and serve subcommands."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import click

from code_deps import __version__
from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.config import load_config
from code_deps.errors import CodeDepsError
from code_deps.models import DependencyType
from code_deps.pipeline import run_analysis, run_scan

_ROOT = click.Path(exists=True, file_okay=False, path_type=Path)

_TYPE_COLORS = {
    DependencyType.IMPORT: "green",
    DependencyType.REFERENCE: "blue",
    DependencyType.STYLE_IMPORT: "magenta",
    DependencyType.MARKUP_LINK: "yellow",
}


def _progress(stage: str, current: int, total: int):
    click.echo(f"  {stage}: {current}/{total}", nl=(current == total), err=True)


def _rel(path: str, root: str | None) -> str:
    return os.path.relpath(path, root) if root and os.path.isabs(path) else path


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """code-deps: Map file-level dependencies of a project."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if verbose:
        logging.getLogger("code_deps").setLevel(logging.DEBUG)


@cli.command()
@click.argument("root", type=_ROOT, default=".")
def scan(root: Path):
    """List the files the analyzer would consider."""
    config = load_config(root)
    try:
        structure = run_scan(config)
    except CodeDepsError as e:
        raise click.ClickException(str(e))

    by_type: dict[str, int] = {}
    for f in sorted(structure.all_files, key=lambda f: f.relative_path):
        click.echo(f"{f.type.value:>16}  {f.relative_path}  {click.style(f'{f.size}B', dim=True)}")
        by_type[f.type.value] = by_type.get(f.type.value, 0) + 1

    click.echo(f"\n{len(structure.all_files)} file(s)")
    for ftype, count in sorted(by_type.items()):
        click.echo(f"  {ftype}: {count}")


@cli.command()
@click.argument("root", type=_ROOT, default=".")
@click.option("--progress/--no-progress", default=False, help="Report progress on stderr")
def graph(root: Path, progress: bool):
    """Build the dependency graph and print its edges."""
    config = load_config(root)
    try:
        result = run_analysis(config, progress=_progress if progress else None)
    except CodeDepsError as e:
        raise click.ClickException(str(e))

    ws = config.workspace_root
    for source in sorted(result.graph.edges):
        targets = result.graph.edges[source]
        if not targets:
            continue
        click.echo(click.style(_rel(source, ws), fg="cyan"))
        for target, dep in targets.items():
            color = _TYPE_COLORS.get(dep.type, "white")
            click.echo(f"  {click.style(dep.type.value, fg=color):>24}  {_rel(target, ws)}")

    click.echo(f"\n{len(result.graph.nodes)} node(s), {result.graph.edge_count} edge(s), "
               f"{len(result.cycles)} cycle(s)")


@cli.command()
@click.argument("root", type=_ROOT, default=".")
def cycles(root: Path):
    """Report circular dependency chains. Exits 1 when any are found."""
    config = load_config(root)
    try:
        result = run_analysis(config)
    except CodeDepsError as e:
        raise click.ClickException(str(e))

    if not result.cycles:
        click.echo("No circular dependencies found.")
        return

    click.echo(click.style(f"{len(result.cycles)} circular dependency chain(s):", fg="red"))
    for cycle in result.cycles:
        click.echo("  ↻ " + " → ".join(_rel(p, config.workspace_root) for p in cycle))
    raise SystemExit(1)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", type=_ROOT, default=".", help="Workspace root")
def summary(file_path: str, root: Path):
    """Print the dependency summary of one file."""
    analyzer = DependencyAnalyzer(load_config(root))
    try:
        text = asyncio.run(analyzer.generate_dependency_summary(os.path.abspath(file_path)))
    except (CodeDepsError, OSError) as e:
        raise click.ClickException(str(e))
    click.echo(text, nl=False)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", type=_ROOT, default=".", help="Workspace root")
@click.option("--recursive", "-r", is_flag=True, help="Follow internal dependencies")
@click.option("--depth", default=3, show_default=True, help="Maximum depth with --recursive")
@click.option("--reverse", is_flag=True, help="List files depending on FILE_PATH instead")
def dependents(file_path: str, root: Path, recursive: bool, depth: int, reverse: bool):
    """List what FILE_PATH depends on, or with --reverse what depends on it."""
    config = load_config(root)
    analyzer = DependencyAnalyzer(config)
    absolute = os.path.abspath(file_path)
    try:
        if reverse:
            structure = run_scan(config)
            for path in analyzer.get_file_reverse_dependencies(absolute, structure):
                click.echo(_rel(path, config.workspace_root))
            return
        deps = analyzer.get_file_dependencies(absolute, recursive=recursive, max_depth=depth)
    except (CodeDepsError, OSError) as e:
        raise click.ClickException(str(e))

    for dep in deps:
        marker = click.style("ext", fg="yellow") if dep.is_external else "   "
        click.echo(f"{marker}  {dep.type.value:>12}  {_rel(dep.source, config.workspace_root)}"
                   f" -> {_rel(dep.target, config.workspace_root)}")


@cli.command()
@click.argument("question")
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False), help="File to discuss")
@click.option("--root", type=_ROOT, default=".", help="Workspace root")
@click.option("--max-tokens", default=None, type=int, help="Completion token limit")
def ask(question: str, file_path: str | None, root: Path, max_tokens: int | None):
    """Ask the completion API a question, optionally about one file."""
    from code_deps.ai import AIConfig, ContextBuilder, DeepSeekService
    from code_deps.scanner import ProjectScanner

    ai_config = AIConfig()
    if not ai_config.api_key:
        raise click.ClickException("Set DEEPSEEK_API_KEY to use the completion API")

    config = load_config(root)

    async def _run() -> str:
        prompt = question
        if file_path:
            builder = ContextBuilder(ProjectScanner(config), DependencyAnalyzer(config))
            context = await builder.create_context_for_file(os.path.abspath(file_path))
            prompt = builder.format_context(context, question)
        async with DeepSeekService(ai_config) as service:
            return await service.get_completion(prompt, max_tokens)

    try:
        answer = asyncio.run(_run())
    except (CodeDepsError, OSError) as e:
        raise click.ClickException(str(e))
    if not answer:
        raise click.ClickException("No answer from the completion API (see log)")
    click.echo(answer)


@cli.command()
@click.argument("root", type=_ROOT, default=".")
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(root: Path, port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'code-deps[web]'"
        )

    from code_deps.web import create_app

    click.echo(f"Starting code-deps API at http://{host}:{port}")
    uvicorn.run(create_app(load_config(root)), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
