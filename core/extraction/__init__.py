"""
Text extraction from React component source.

Example:
    from core.extraction import ComponentExtractor

    metadata = ComponentExtractor().extract(source, "src/components/Hero.tsx")
    print(metadata.text_content)
"""

from .classifier import is_meaningful_content, rejection_reason
from .bindings import BindingTable
from .visitor import ContentVisitor
from .extractor import ComponentExtractor, extract_metadata
from .aggregator import aggregate, flatten_text_content

__all__ = [
    "is_meaningful_content",
    "rejection_reason",
    "BindingTable",
    "ContentVisitor",
    "ComponentExtractor",
    "extract_metadata",
    "aggregate",
    "flatten_text_content"
]
