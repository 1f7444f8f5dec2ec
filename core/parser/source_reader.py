"""
Encoding-tolerant reading of component source files.

Component sources are expected to be UTF-8, but projects occasionally carry
files saved in legacy encodings; those are decoded rather than skipped.
"""

import logging
from pathlib import Path
from typing import Tuple

import chardet

from .base import ParseError

logger = logging.getLogger(__name__)


class SourceReadError(ParseError):
    """Raised when a source file cannot be read at all"""
    pass


class SourceReader:
    """Reads source files with encoding detection and fallbacks."""

    DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

    def __init__(self, max_file_size: int = DEFAULT_MAX_FILE_SIZE):
        self.max_file_size = max_file_size

    @staticmethod
    def detect_encoding(file_path: Path) -> str:
        """
        Detect file encoding from a leading sample.

        Args:
            file_path: Path to file

        Returns:
            Detected encoding name, 'utf-8' when detection is inconclusive
        """
        try:
            with open(file_path, 'rb') as f:
                raw_data = f.read(10000)

            detection = chardet.detect(raw_data)
            if detection and detection['encoding'] and detection['confidence'] > 0.7:
                return detection['encoding']
        except OSError as e:
            logger.warning(f"Encoding detection failed for {file_path}: {e}")

        return 'utf-8'

    def read(self, file_path: Path) -> Tuple[str, str]:
        """
        Read a file, trying several encodings in order of preference.

        Args:
            file_path: Path to file

        Returns:
            (content, actual_encoding_used)

        Raises:
            SourceReadError: If the file is missing, too large or unreadable
        """
        try:
            file_size = file_path.stat().st_size
        except OSError as e:
            raise SourceReadError(f"Cannot read file stats for {file_path}: {e}") from e

        if file_size > self.max_file_size:
            raise SourceReadError(f"File too large: {file_path} ({file_size} bytes)")

        try:
            raw_content = file_path.read_bytes()
        except OSError as e:
            raise SourceReadError(f"Cannot read {file_path}: {e}") from e

        # UTF-8 first, since nearly every component file is UTF-8 and
        # detection on short files is unreliable
        encodings = ['utf-8', 'utf-8-sig', self.detect_encoding(file_path), 'cp1252', 'latin-1']
        encodings = list(dict.fromkeys(encoding.lower() for encoding in encodings))

        for encoding in encodings:
            try:
                content = raw_content.decode(encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug(f"Failed to read {file_path} with {encoding}: {e}")
                continue
            if content.startswith('\ufeff'):
                content = content[1:]
            logger.debug(f"Read {file_path} with encoding: {encoding}")
            return content, encoding

        logger.warning(f"Using binary fallback for {file_path}")
        return raw_content.decode('utf-8', errors='replace'), 'utf-8-binary-fallback'
