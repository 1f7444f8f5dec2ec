"""
Output writers: the metadata document and index.html meta tags.
"""

from .metadata_writer import write_project_metadata
from .meta_tags import (
    BLOCK_START, BLOCK_END, generate_meta_tags, inject_meta_tags,
    remove_meta_tags, update_index_html
)

__all__ = [
    "write_project_metadata",
    "BLOCK_START",
    "BLOCK_END",
    "generate_meta_tags",
    "inject_meta_tags",
    "remove_meta_tags",
    "update_index_html"
]
