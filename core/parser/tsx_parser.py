"""
TSX parser for UI component source files.

Every component file (.js, .jsx, .ts, .tsx) is parsed with the TSX
grammar, which accepts JSX markup together with TypeScript syntax.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from .base import ParsedSource
from .tree_sitter_base import TreeSitterBase

logger = logging.getLogger(__name__)


class TSXParser(TreeSitterBase):
    """Parses JavaScript/TypeScript source with embedded JSX markup."""

    SUPPORTED_EXTENSIONS = [".jsx", ".tsx", ".js", ".ts"]

    def __init__(self):
        super().__init__("tsx")
        self.__version__ = "1.0.0"
        logger.debug("TSX parser initialized")

    def get_supported_extensions(self) -> List[str]:
        return list(self.SUPPORTED_EXTENSIONS)

    def can_parse(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.SUPPORTED_EXTENSIONS

    def parse(self, source_text: str, file_path: Union[str, Path] = "") -> ParsedSource:
        """
        Parse component source text.

        Raises:
            ParseFailure: If the source is not valid TSX
        """
        return self.parse_source(source_text, file_path)


_shared_parser: Optional[TSXParser] = None
_shared_lock = threading.Lock()


def get_tsx_parser() -> TSXParser:
    """Return a process-wide TSX parser, creating it on first use"""
    global _shared_parser
    with _shared_lock:
        if _shared_parser is None:
            _shared_parser = TSXParser()
        return _shared_parser
