"""
react-meta-data core package

Extracts human-readable text from React component sources and produces
SEO metadata for the project.
"""

__version__ = "1.0.0"

from .models import ComponentMetadata, ProjectMetadata, Diagnostic, DiagnosticKind, ScanConfig

__all__ = [
    "ComponentMetadata",
    "ProjectMetadata",
    "Diagnostic",
    "DiagnosticKind",
    "ScanConfig"
]
