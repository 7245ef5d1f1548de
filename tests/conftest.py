"""Shared fixtures: small projects written into a temporary workspace."""

from __future__ import annotations

from pathlib import Path

import pytest

from code_deps.analysis.dependency_graph import DependencyAnalyzer
from code_deps.models import AnalyzerConfig

FIXTURES = Path(__file__).parent / "fixtures"
WEBAPP = FIXTURES / "webapp"


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> text) under *root*."""
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def workspace(tmp_path):
    return tmp_path.resolve()


@pytest.fixture
def config(workspace):
    return AnalyzerConfig(workspace_root=str(workspace))


@pytest.fixture
def analyzer(config):
    return DependencyAnalyzer(config)
