"""Extractor registry."""

from __future__ import annotations

from code_deps.extractor.base import BaseExtractor, ExtractionContext
from code_deps.extractor.css_extractor import CssExtractor
from code_deps.extractor.html_extractor import HtmlExtractor
from code_deps.extractor.js_extractor import JsExtractor
from code_deps.extractor.manifest_extractor import ManifestExtractor
from code_deps.extractor.markdown_extractor import MarkdownExtractor
from code_deps.models import Dependency, FileType

_EXTRACTORS: dict[FileType, BaseExtractor] = {
    FileType.SCRIPT: JsExtractor(),
    FileType.MARKUP: HtmlExtractor(),
    FileType.STYLESHEET: CssExtractor(),
    FileType.STRUCTURED_DATA: ManifestExtractor(),
    FileType.PROSE: MarkdownExtractor(),
}


def extract_dependencies(
    file_path: str,
    file_type: FileType,
    content: str,
    context: ExtractionContext,
) -> list[Dependency]:
    """Extract the dependencies of one file; unsupported types yield []."""
    extractor = _EXTRACTORS.get(file_type)
    if extractor is None:
        return []
    return extractor.extract(file_path, content, context)


__all__ = [
    "BaseExtractor",
    "CssExtractor",
    "ExtractionContext",
    "HtmlExtractor",
    "JsExtractor",
    "ManifestExtractor",
    "MarkdownExtractor",
    "extract_dependencies",
]
