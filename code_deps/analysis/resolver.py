"""Reference resolution — raw reference strings to canonical file paths."""

from __future__ import annotations

import os
from typing import Callable, Iterable

# Probed in order when a reference has no extension
CANDIDATE_EXTENSIONS: tuple[str, ...] = (
    ".js", ".jsx", ".ts", ".tsx", ".json", ".css", ".scss", ".html", ".md",
)


class PathResolver:
    """Map ``(source_file, reference)`` to an absolute path.

    Resolution fails soft: when no candidate exists on disk the
    extension-less path is returned and callers drop it later if it is not
    a known file.
    """

    def __init__(
        self,
        workspace_root: str | None = None,
        exists: Callable[[str], bool] = os.path.exists,
    ):
        self.workspace_root = workspace_root
        self._exists = exists

    def resolve(self, source_path: str, reference: str) -> str:
        if reference.startswith("/"):
            if self.workspace_root:
                return os.path.normpath(os.path.join(self.workspace_root, reference.lstrip("/")))
            return reference
        if reference.startswith("http"):
            return reference

        source_dir = os.path.dirname(source_path)
        resolved = os.path.abspath(os.path.join(source_dir, reference))

        if not os.path.splitext(resolved)[1]:
            for ext in CANDIDATE_EXTENSIONS:
                candidate = resolved + ext
                if self._exists(candidate):
                    return candidate
            for ext in CANDIDATE_EXTENSIONS:
                candidate = os.path.join(resolved, f"index{ext}")
                if self._exists(candidate):
                    return candidate

        return resolved


class ExternalPolicy:
    """Decide whether a reference points outside the project."""

    def __init__(self, patterns: Iterable[str], process_prefixes: Iterable[str] = ()):
        self.patterns = list(patterns)
        self.process_prefixes = list(process_prefixes)

    def is_external(self, reference: str) -> bool:
        if any(pattern in reference for pattern in self.patterns):
            return True
        # Bare specifiers are registry packages
        return not (reference.startswith(".") or reference.startswith("/"))

    def should_process(self, reference: str) -> bool:
        """Whether an external reference is still resolved and recorded."""
        return any(reference.startswith(prefix) for prefix in self.process_prefixes)
