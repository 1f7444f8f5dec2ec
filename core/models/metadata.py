"""
Metadata records produced by component text extraction.

ComponentMetadata is built once per successfully parsed file and
ProjectMetadata once per run. Both serialize with the camelCase keys of
the project-metadata.json document.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision, e.g. 2024-01-31T09:15:00.000Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ComponentMetadata(BaseModel):
    """Text content and derived SEO fields for one component file"""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True
    )

    file_path: str = Field(default="", alias="filePath")
    title: str = ""
    description: str = ""
    text_content: List[str] = Field(default_factory=list, alias="textContent")

    @field_validator('text_content')
    @classmethod
    def validate_text_content(cls, v: List[str]) -> List[str]:
        """textContent must not contain duplicates"""
        if len(set(v)) != len(v):
            raise ValueError('textContent must not contain duplicate entries')
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using the document's camelCase keys"""
        return self.model_dump(by_alias=True)


class ProjectMetadata(BaseModel):
    """All component records of one run"""
    model_config = ConfigDict(
        populate_by_name=True
    )

    generated_at: datetime = Field(default_factory=utc_now, alias="generatedAt")
    components: List[ComponentMetadata] = Field(default_factory=list)

    @field_serializer('generated_at')
    def serialize_generated_at(self, value: datetime) -> str:
        return format_timestamp(value)

    @property
    def component_count(self) -> int:
        return len(self.components)

    def flattened_text(self) -> List[str]:
        """Ordered, de-duplicated text across all components"""
        from ..extraction.aggregator import flatten_text_content
        return flatten_text_content(self.components)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to the project-metadata.json format"""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectMetadata':
        return cls.model_validate(data)
