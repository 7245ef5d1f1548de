"""Prompt context for questions about a single file."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.scanner import ProjectScanner

MAX_CONTENT_CHARS = 6000


@dataclass
class FileContext:
    path: str
    relative_path: str
    content: str
    dependency_summary: str


class ContextBuilder:
    """Gather a file's content and dependency summary for the chat prompt."""

    def __init__(self, scanner: ProjectScanner, analyzer: DependencyAnalyzer):
        self.scanner = scanner
        self.analyzer = analyzer

    async def create_context_for_file(self, file_path: str) -> FileContext:
        info = await asyncio.to_thread(self.scanner.get_file_details, file_path)
        summary = await self.analyzer.generate_dependency_summary(info.path)
        return FileContext(
            path=info.path,
            relative_path=info.relative_path,
            content=info.content or "",
            dependency_summary=summary,
        )

    @staticmethod
    def format_context(context: FileContext, question: str | None = None) -> str:
        parts = [f"File: {context.relative_path}"]
        if context.content:
            content = context.content
            if len(content) > MAX_CONTENT_CHARS:
                content = content[:MAX_CONTENT_CHARS] + "\n... (truncated)"
            parts.append(f"```\n{content}\n```")
        if context.dependency_summary:
            parts.append(context.dependency_summary.rstrip())
        if question:
            parts.append(f"Question: {question}")
        return "\n\n".join(parts)
