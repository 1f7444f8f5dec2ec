"""
Component discovery.
"""

from .workspace_scanner import WorkspaceScanner, is_component_file, looks_like_component

__all__ = [
    "WorkspaceScanner",
    "is_component_file",
    "looks_like_component"
]
