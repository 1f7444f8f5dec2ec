"""
Component discovery for a project tree.

Walks the tree with os.scandir, skipping dependency, build and hidden
directories, and keeps files that look like React components.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional

from ..models.config import ScanConfig

logger = logging.getLogger(__name__)

COMPONENT_EXTENSIONS = (".jsx", ".tsx", ".js", ".ts")

# Substrings that mark a source file as containing markup or importing React
REACT_IMPORT_MARKERS = ("import React", 'from "react"', "from 'react'")


def looks_like_component(content: str) -> bool:
    """True if the source contains markup tags or a React import"""
    if '<' in content and '/>' in content:
        return True
    if '</' in content:
        return True
    return any(marker in content for marker in REACT_IMPORT_MARKERS)


def is_component_file(
    file_path: Path,
    content: Optional[str] = None,
    extensions: Iterable[str] = COMPONENT_EXTENSIONS
) -> bool:
    """
    Decide whether a file is a React component.

    Args:
        file_path: Path to the file
        content: File content if already read; otherwise the file is read
        extensions: Accepted extensions, compared case-insensitively

    Returns:
        True if the extension is accepted and the content looks like a component
    """
    if file_path.suffix.lower() not in extensions:
        return False

    if content is None:
        try:
            content = file_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            logger.warning(f"Cannot read {file_path}: {e}")
            return False

    return looks_like_component(content)


class WorkspaceScanner:
    """Finds component files under a project root"""

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()
        self._skip_directories = frozenset(self.config.skip_directories)
        self._extensions = tuple(self.config.extensions)

    def should_skip_directory(self, name: str) -> bool:
        if name in self._skip_directories:
            return True
        return self.config.skip_hidden and name.startswith('.')

    def find_components(self, root: Path) -> List[Path]:
        """
        Recursively collect component files.

        Entries are visited in name order so that discovery order, and with it
        the order of components in the output document, is stable across runs.

        Args:
            root: Project root directory

        Returns:
            Component file paths in discovery order
        """
        start_time = time.perf_counter()
        components: List[Path] = []

        def scan_directory(dir_path: Path) -> None:
            try:
                with os.scandir(dir_path) as it:
                    entries = sorted(it, key=lambda entry: entry.name)
            except OSError as e:
                logger.warning(f"Cannot scan directory {dir_path}: {e}")
                return

            for entry in entries:
                entry_path = Path(entry.path)
                try:
                    if entry.is_dir(follow_symlinks=False):
                        if not self.should_skip_directory(entry.name):
                            scan_directory(entry_path)
                    elif entry.is_file() and is_component_file(entry_path, extensions=self._extensions):
                        logger.debug(f"Found component: {entry_path}")
                        components.append(entry_path)
                except OSError as e:
                    logger.debug(f"Skipping entry {entry.name}: {e}")

        scan_directory(Path(root))

        scan_time = time.perf_counter() - start_time
        logger.info(f"Found {len(components)} components under {root} in {scan_time:.3f}s")
        return components
