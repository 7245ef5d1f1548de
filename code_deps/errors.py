"""Exceptions raised by code-deps."""

from __future__ import annotations


class CodeDepsError(Exception):
    """Base class for errors surfaced to callers."""


class WorkspaceNotAvailable(CodeDepsError):
    """No usable workspace root was configured."""

    def __init__(self, root: str | None = None):
        self.root = root
        if root:
            super().__init__(f"Workspace folder does not exist: {root}")
        else:
            super().__init__("No workspace folder is open")
