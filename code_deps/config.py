"""Analyzer configuration loading — defaults merged with ``.code-deps.json``."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path

from code_deps.models import AnalyzerConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".code-deps.json"

_LIST_KEYS = ("external_patterns", "process_external", "excluded_folders", "excluded_files")


def _read_config_file(path: Path) -> dict:
    """Load a project config file, returning {} when missing or unusable."""
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be an object", path)
        return {}
    return data


def load_config(workspace_root: str | Path | None, **overrides) -> AnalyzerConfig:
    """Build an :class:`AnalyzerConfig` for *workspace_root*.

    Values from ``<root>/.code-deps.json`` replace the defaults; keyword
    *overrides* (ignored when ``None``) win over both.
    """
    root = str(Path(workspace_root).resolve()) if workspace_root else None
    config = AnalyzerConfig(workspace_root=root)

    file_values = _read_config_file(Path(root) / CONFIG_FILE_NAME) if root else {}
    known = {f.name for f in dataclasses.fields(AnalyzerConfig)} - {"workspace_root"}

    for key, value in file_values.items():
        if key not in known:
            logger.debug("Unknown config key %r in %s", key, CONFIG_FILE_NAME)
            continue
        if key in _LIST_KEYS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                logger.warning("Config key %r must be a list of strings", key)
                continue
            value = list(value)
        elif key == "max_file_size" and (not isinstance(value, int) or isinstance(value, bool)):
            logger.warning("Config key 'max_file_size' must be an integer")
            continue
        setattr(config, key, value)

    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    return config
