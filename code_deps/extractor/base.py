"""Abstract base extractor with shared line attribution."""

from __future__ import annotations

import abc
import re
from dataclasses import dataclass

from code_deps.analysis.resolver import ExternalPolicy, PathResolver
from code_deps.models import Dependency, DependencyType


@dataclass
class ExtractionContext:
    """Collaborators every extractor needs to turn matches into edges."""
    resolver: PathResolver
    policy: ExternalPolicy


class BaseExtractor(abc.ABC):
    """Base class for format-specific dependency extractors."""

    @abc.abstractmethod
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        """Return the dependencies declared by *content*."""

    @staticmethod
    def _find_line_numbers(content: str, snippet: str) -> list[int]:
        """Zero-based indices of every line containing *snippet* verbatim.

        A snippet spanning several lines is never found, and identical lines
        are all attributed.
        """
        return [i for i, line in enumerate(content.split("\n")) if snippet in line]

    def _dependency(
        self,
        file_path: str,
        content: str,
        match: re.Match,
        target: str,
        dep_type: DependencyType,
        is_external: bool,
    ) -> Dependency:
        return Dependency(
            source=file_path,
            target=target,
            type=dep_type,
            line_numbers=self._find_line_numbers(content, match.group(0)),
            is_external=is_external,
        )

    @staticmethod
    def _skip_url(reference: str, context: ExtractionContext) -> bool:
        """Data URLs always, absolute URLs unless whitelisted."""
        if reference.startswith("data:"):
            return True
        return reference.startswith("http") and not context.policy.should_process(reference)
