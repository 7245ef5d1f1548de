"""HTML extractor — script, stylesheet link and image references."""

from __future__ import annotations

import re

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.models import Dependency, DependencyType

_SCRIPT_SRC_RE = re.compile(r"<script[^>]*src=[\"']([^\"']+)[\"'][^>]*>")
_LINK_HREF_RE = re.compile(r"<link[^>]*href=[\"']([^\"']+)[\"'][^>]*>")
_IMG_SRC_RE = re.compile(r"<img[^>]*src=[\"']([^\"']+)[\"'][^>]*>")


class HtmlExtractor(BaseExtractor):
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        deps: list[Dependency] = []
        for pattern in (_SCRIPT_SRC_RE, _LINK_HREF_RE, _IMG_SRC_RE):
            for m in pattern.finditer(content):
                ref = m.group(1)
                if self._skip_url(ref, context):
                    continue
                deps.append(self._dependency(
                    file_path,
                    content,
                    m,
                    context.resolver.resolve(file_path, ref),
                    DependencyType.MARKUP_LINK,
                    context.policy.is_external(ref),
                ))
        return deps
