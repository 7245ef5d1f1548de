"""Markdown extractor — local image and link references."""

from __future__ import annotations

import re

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.models import Dependency, DependencyType

_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


class MarkdownExtractor(BaseExtractor):
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        deps: list[Dependency] = []

        for m in _IMAGE_RE.finditer(content):
            ref = m.group(2)
            if ref.startswith("http"):
                continue
            deps.append(self._reference(file_path, content, m, ref, context))

        # Images with alt text match here as well
        for m in _LINK_RE.finditer(content):
            ref = m.group(2)
            if ref.startswith("http") or ref.startswith("#") or "@" in ref:
                continue
            deps.append(self._reference(file_path, content, m, ref, context))

        return deps

    def _reference(
        self, file_path: str, content: str, m: re.Match, ref: str, context: ExtractionContext,
    ) -> Dependency:
        return self._dependency(
            file_path,
            content,
            m,
            context.resolver.resolve(file_path, ref),
            DependencyType.REFERENCE,
            False,
        )
