"""
Fold per-file records into the project-wide metadata document.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from ..models.metadata import ComponentMetadata, ProjectMetadata, utc_now


def aggregate(
    components: Iterable[ComponentMetadata],
    generated_at: Optional[datetime] = None
) -> ProjectMetadata:
    """
    Build ProjectMetadata from component records.

    Args:
        components: Records in discovery order
        generated_at: Generation timestamp; defaults to the current UTC time

    Returns:
        ProjectMetadata with the records in the order given
    """
    return ProjectMetadata(
        generated_at=generated_at if generated_at is not None else utc_now(),
        components=list(components)
    )


def flatten_text_content(components: Iterable[ComponentMetadata]) -> List[str]:
    """Every component's textContent in order, first occurrence wins"""
    seen = set()
    flattened = []
    for component in components:
        for text in component.text_content:
            if text not in seen:
                seen.add(text)
                flattened.append(text)
    return flattened
