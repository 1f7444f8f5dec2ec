"""
React Meta Data - SEO metadata from React component sources.

Scans a React project, extracts the human-readable text of every component
and writes project-metadata.json plus meta tags in public/index.html.
"""

__version__ = "1.0.0"

from core.models.metadata import ComponentMetadata, ProjectMetadata
from core.extraction.extractor import ComponentExtractor
from core.pipeline import MetadataPipeline, RunReport

__all__ = [
    "ComponentMetadata",
    "ProjectMetadata",
    "ComponentExtractor",
    "MetadataPipeline",
    "RunReport",
    "__version__",
]
