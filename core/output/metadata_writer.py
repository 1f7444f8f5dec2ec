"""
Writes the project-metadata.json document.
"""

import logging
from pathlib import Path

from ..models.metadata import ProjectMetadata

logger = logging.getLogger(__name__)


def write_project_metadata(metadata: ProjectMetadata, path: Path) -> Path:
    """
    Serialize metadata as indented JSON with camelCase keys.

    Non-ASCII text is written as-is, UTF-8 encoded.

    Raises:
        OSError: If the file cannot be written
        UnicodeError: If the metadata cannot be encoded as UTF-8
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(metadata.to_json(indent=2))

    logger.info(f"Saved metadata for {metadata.component_count} components to {path}")
    return path
