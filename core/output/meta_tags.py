"""
SEO meta tags for the project's index.html.

The tags live in a delimited block so that later runs can find and replace
it without touching anything else in the document.
"""

import html
import logging
import re
from pathlib import Path

from ..extraction.aggregator import flatten_text_content
from ..models.metadata import ProjectMetadata

logger = logging.getLogger(__name__)

BLOCK_START = "<!-- Auto-generated meta tags -->"
BLOCK_END = "<!-- End auto-generated meta tags -->"
HEAD_CLOSE = "</head>"

DEFAULT_SITE_TITLE = "React Application"
DESCRIPTION_COUNT = 5
SOCIAL_COUNT = 3

_BLOCK_PATTERN = re.compile(re.escape(BLOCK_START) + r".*?" + re.escape(BLOCK_END) + r"\n?", re.DOTALL)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


def generate_meta_tags(
    metadata: ProjectMetadata,
    site_title: str = DEFAULT_SITE_TITLE,
    description_count: int = DESCRIPTION_COUNT,
    social_count: int = SOCIAL_COUNT
) -> str:
    """
    Render the meta tag block from the project's flattened text content.

    Args:
        metadata: Aggregated project metadata
        site_title: Value of the og:title and twitter:title tags
        description_count: Number of leading strings in the description tag
        social_count: Number of leading strings in the social description tags

    Returns:
        The delimited block, without surrounding newlines
    """
    texts = flatten_text_content(metadata.components)

    description = " | ".join(texts[:description_count])
    keywords = ", ".join(texts)
    social_description = " | ".join(texts[:social_count])

    lines = [
        BLOCK_START,
        f'<meta name="description" content="{_attr(description)}" />',
        f'<meta name="keywords" content="{_attr(keywords)}" />',
        f'<meta property="og:title" content="{_attr(site_title)}" />',
        f'<meta property="og:description" content="{_attr(social_description)}" />',
        f'<meta name="twitter:title" content="{_attr(site_title)}" />',
        f'<meta name="twitter:description" content="{_attr(social_description)}" />',
        BLOCK_END,
    ]
    return "\n".join(lines)


def remove_meta_tags(document: str) -> str:
    """Remove every auto-generated block from an HTML document"""
    return _BLOCK_PATTERN.sub("", document)


def inject_meta_tags(document: str, tags: str) -> str:
    """
    Replace the auto-generated block of an HTML document.

    Any previous block is removed and the new one is inserted before the
    first closing head tag. A document without one is returned unchanged.
    """
    if HEAD_CLOSE not in document:
        return document

    document = remove_meta_tags(document)
    return document.replace(HEAD_CLOSE, f"{tags}\n{HEAD_CLOSE}", 1)


def update_index_html(
    path: Path,
    metadata: ProjectMetadata,
    site_title: str = DEFAULT_SITE_TITLE,
    description_count: int = DESCRIPTION_COUNT,
    social_count: int = SOCIAL_COUNT
) -> bool:
    """
    Rewrite the meta tag block of an index.html file in place.

    Returns:
        False if the file does not exist, True once it has been written

    Raises:
        OSError: If the file exists but cannot be read or written
        UnicodeError: If the document cannot be encoded as UTF-8
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"No index.html at {path}, skipping meta tags")
        return False

    with open(path, 'r', encoding='utf-8') as f:
        document = f.read()

    if HEAD_CLOSE not in document:
        logger.warning(f"{path} has no {HEAD_CLOSE} tag, meta tags not inserted")

    tags = generate_meta_tags(metadata, site_title, description_count, social_count)
    updated = inject_meta_tags(document, tags)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(updated)

    logger.info(f"Meta tags updated in {path}")
    return True
