"""
Core data models for react-meta-data

Pydantic models for extracted metadata, diagnostics, and configuration.
"""

from .metadata import ComponentMetadata, ProjectMetadata, format_timestamp
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from .config import ScanConfig, GlobalSettings

__all__ = [
    # Metadata
    "ComponentMetadata",
    "ProjectMetadata",
    "format_timestamp",

    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",

    # Configuration
    "ScanConfig",
    "GlobalSettings"
]
