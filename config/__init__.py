"""
Configuration management for react-meta-data

Handles loading and validation of per-project configuration.
"""

from .loader import ConfigurationLoader
from .defaults import CONFIG_FILENAME, DEFAULT_SETTINGS

__all__ = ["ConfigurationLoader", "CONFIG_FILENAME", "DEFAULT_SETTINGS"]
