"""
Default configuration values for react-meta-data.

Centralized defaults that can be overridden by environment variables or a
react-meta.json file in the project root.
"""

from typing import Any, Dict

CONFIG_FILENAME = "react-meta.json"

DEFAULT_SETTINGS = {
    # Component discovery
    "scan": {
        "extensions": [".jsx", ".tsx", ".js", ".ts"],
        "skip_directories": ["node_modules", "dist", "build"],
        "skip_hidden": True,
        "max_file_size_mb": 10
    },

    # Outputs
    "output": {
        "metadata_filename": "project-metadata.json",
        "index_html_path": "public/index.html",
        "update_index_html": True
    },

    # Meta tag generation
    "meta_tags": {
        "site_title": "React Application",
        "description_count": 5,
        "social_count": 3
    }
}

# Environment variable mappings onto ScanConfig fields
ENV_VAR_MAPPING = {
    'REACT_META_SITE_TITLE': 'site_title',
    'REACT_META_METADATA_FILENAME': 'metadata_filename',
    'REACT_META_INDEX_HTML_PATH': 'index_html_path',
    'REACT_META_UPDATE_INDEX_HTML': 'update_index_html',
    'REACT_META_MAX_FILE_SIZE_MB': 'max_file_size_mb',
    'REACT_META_DESCRIPTION_COUNT': 'description_count',
    'REACT_META_SOCIAL_COUNT': 'social_count'
}


def get_default_scan_config() -> Dict[str, Any]:
    """Get default ScanConfig fields as a flat dictionary"""
    return {
        'extensions': list(DEFAULT_SETTINGS['scan']['extensions']),
        'skip_directories': list(DEFAULT_SETTINGS['scan']['skip_directories']),
        'skip_hidden': DEFAULT_SETTINGS['scan']['skip_hidden'],
        'max_file_size_mb': DEFAULT_SETTINGS['scan']['max_file_size_mb'],
        'metadata_filename': DEFAULT_SETTINGS['output']['metadata_filename'],
        'index_html_path': DEFAULT_SETTINGS['output']['index_html_path'],
        'update_index_html': DEFAULT_SETTINGS['output']['update_index_html'],
        'site_title': DEFAULT_SETTINGS['meta_tags']['site_title'],
        'description_count': DEFAULT_SETTINGS['meta_tags']['description_count'],
        'social_count': DEFAULT_SETTINGS['meta_tags']['social_count']
    }
