"""package.json extractor — declared packages become external edges."""

from __future__ import annotations

import json
import logging

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.models import Dependency, DependencyType

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


class ManifestExtractor(BaseExtractor):
    def extract(self, file_path: str, content: str, context: ExtractionContext) -> list[Dependency]:
        if not file_path.endswith(MANIFEST_NAME):
            return []

        try:
            manifest = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Error parsing JSON in %s: %s", file_path, e)
            return []
        if not isinstance(manifest, dict):
            return []

        deps: list[Dependency] = []
        for section in DEPENDENCY_SECTIONS:
            packages = manifest.get(section)
            if not isinstance(packages, dict):
                continue
            for package in packages:
                deps.append(Dependency(
                    source=file_path,
                    target=f"node_modules/{package}",
                    type=DependencyType.IMPORT,
                    is_external=True,
                ))
        return deps
