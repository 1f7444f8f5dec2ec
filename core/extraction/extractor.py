"""
Per-file extraction: one parse and one tree walk per component file.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..models.diagnostics import DiagnosticLog
from ..models.metadata import ComponentMetadata
from ..parser.tsx_parser import TSXParser, get_tsx_parser
from .classifier import is_meaningful_content
from .visitor import ContentVisitor

logger = logging.getLogger(__name__)


def unique_in_order(values: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping the first occurrence of each value"""
    return list(dict.fromkeys(values))


def title_from_path(file_path: Union[str, Path]) -> str:
    """Base name of a path with its last extension removed"""
    if not file_path:
        return ""
    return Path(file_path).stem


class ComponentExtractor:
    """
    Extracts ComponentMetadata from component source text.

    The parser is shared between calls; every call builds its own visitor
    and binding table, so nothing carries over from one file to the next.
    """

    def __init__(self, parser: Optional[TSXParser] = None):
        self.parser = parser if parser is not None else get_tsx_parser()

    def extract(
        self,
        source_text: str,
        file_path: Union[str, Path] = "",
        diagnostics: Optional[DiagnosticLog] = None
    ) -> ComponentMetadata:
        """
        Extract text content and derived fields from one file.

        Args:
            source_text: Component source code
            file_path: Path of the file; used for the title fallback and in
                diagnostics. The caller replaces it with a project-relative path.
            diagnostics: Optional sink for skipped-candidate diagnostics

        Returns:
            ComponentMetadata for the file

        Raises:
            ParseFailure: If the source cannot be parsed as TSX
        """
        path_label = str(file_path)
        parsed = self.parser.parse(source_text, path_label)

        visitor = ContentVisitor(parsed, diagnostics=diagnostics)
        candidates = visitor.visit()

        text_content = [
            text for text in unique_in_order(candidates)
            if is_meaningful_content(text)
        ]

        # No rule assigns title or description directly; both fall back
        title = title_from_path(file_path)
        description = text_content[0] if text_content else ""

        logger.debug(
            f"Extracted {len(text_content)} strings from {path_label or '<source>'}"
            + (f" ({visitor.failures} nodes skipped)" if visitor.failures else "")
        )

        return ComponentMetadata(
            file_path=path_label,
            title=title,
            description=description,
            text_content=text_content
        )


def extract_metadata(
    source_text: str,
    file_path: Union[str, Path] = "",
    diagnostics: Optional[DiagnosticLog] = None
) -> ComponentMetadata:
    """Extract metadata with the shared parser"""
    return ComponentExtractor().extract(source_text, file_path, diagnostics)
