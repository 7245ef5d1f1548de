"""JavaScript/TypeScript dependency extractor using regex patterns."""

from __future__ import annotations

import itertools
import re

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.models import Dependency, DependencyType

_BINDING = r"(?:\{[^}]*\}|\*|[\w$]+)(?:\s+as\s+[\w$]+)?"

# import x from '...', import {a, b as c} from '...', import * as ns from '...'
_IMPORT_RE = re.compile(
    rf"import\s+(?:{_BINDING})?(?:\s*,\s*{_BINDING})?(?:\s*,\s*{_BINDING})?"
    r"(?:\s+from)?\s+['\"]([^'\"]+)['\"]"
)
_REQUIRE_RE = re.compile(
    r"(?:const|let|var)\s+(?:[\w$]+|\{[^}]*\})\s*=\s*require\(\s*['\"]([^'\"]+)['\"]\s*\)"
)
_DYNAMIC_IMPORT_RE = re.compile(r"import\(\s*['\"]([^'\"]+)['\"]\s*\)")
_REFERENCE_RE = re.compile(r"///\s*<reference\s+path\s*=\s*['\"]([^'\"]+)['\"]\s*/>")


class JsExtractor(BaseExtractor):
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        deps: list[Dependency] = []

        module_matches = itertools.chain(
            _IMPORT_RE.finditer(content),
            _REQUIRE_RE.finditer(content),
            _DYNAMIC_IMPORT_RE.finditer(content),
        )
        for m in module_matches:
            spec = m.group(1)
            is_external = context.policy.is_external(spec)
            # Packages are not followed
            if is_external and not context.policy.should_process(spec):
                continue
            target = context.resolver.resolve(file_path, spec)
            deps.append(self._dependency(
                file_path, content, m, target, DependencyType.IMPORT, is_external,
            ))

        for m in _REFERENCE_RE.finditer(content):
            target = context.resolver.resolve(file_path, m.group(1))
            deps.append(self._dependency(
                file_path, content, m, target, DependencyType.REFERENCE, False,
            ))

        return deps
