"""CSS/SCSS/LESS extractor — @import statements and url() references."""

from __future__ import annotations

import re

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.models import Dependency, DependencyType

_IMPORT_RE = re.compile(r"@import\s+(?:url\()?[\"']([^\"']+)[\"'](?:\))?")
_URL_RE = re.compile(r"url\([\"']?([^\"')]+)[\"']?\)")


class CssExtractor(BaseExtractor):
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        deps: list[Dependency] = []

        # @import url("x") also matches the url() pattern and yields two edges
        for m in _IMPORT_RE.finditer(content):
            ref = m.group(1)
            if self._skip_url(ref, context):
                continue
            deps.append(self._style_dependency(file_path, content, m, ref, context))

        for m in _URL_RE.finditer(content):
            ref = m.group(1)
            if ref.startswith("#") or self._skip_url(ref, context):
                continue
            deps.append(self._style_dependency(file_path, content, m, ref, context))

        return deps

    def _style_dependency(
        self, file_path: str, content: str, m: re.Match, ref: str, context: ExtractionContext,
    ) -> Dependency:
        return self._dependency(
            file_path,
            content,
            m,
            context.resolver.resolve(file_path, ref),
            DependencyType.STYLE_IMPORT,
            context.policy.is_external(ref),
        )
