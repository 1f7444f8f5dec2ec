"""
Configuration models for react-meta-data.

ScanConfig holds per-project settings (what to scan, where to write);
GlobalSettings holds process-wide settings read from the environment.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScanConfig(BaseModel):
    """Project-level scan and output configuration"""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        coerce_numbers_to_str=True
    )

    # Discovery
    extensions: List[str] = Field(default_factory=lambda: [".jsx", ".tsx", ".js", ".ts"])
    skip_directories: List[str] = Field(default_factory=lambda: ["node_modules", "dist", "build"])
    skip_hidden: bool = True
    max_file_size_mb: int = Field(default=10, ge=1, le=100)

    # Outputs
    metadata_filename: str = "project-metadata.json"
    index_html_path: str = "public/index.html"
    update_index_html: bool = True

    # Meta tag generation
    site_title: str = "React Application"
    description_count: int = Field(default=5, ge=1, le=50)
    social_count: int = Field(default=3, ge=1, le=50)

    @field_validator('extensions')
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        """Normalize extensions to lowercase with a leading dot"""
        if not v:
            raise ValueError('Extension list cannot be empty')
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith('.') else f'.{ext}')
        return list(dict.fromkeys(normalized))

    @field_validator('metadata_filename', 'index_html_path')
    @classmethod
    def validate_relative_path(cls, v: str) -> str:
        if not v:
            raise ValueError('Output path cannot be empty')
        if Path(v).is_absolute():
            raise ValueError(f'Output path must be relative to the project root: {v}')
        return v

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def metadata_path(self, project_root: Path) -> Path:
        return project_root / self.metadata_filename

    def index_html(self, project_root: Path) -> Path:
        return project_root / self.index_html_path

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanConfig':
        return cls(**data)


class GlobalSettings(BaseSettings):
    """Process-wide settings with environment variable support"""
    model_config = SettingsConfigDict(
        env_prefix="REACT_META_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_file: bool = False
    log_file: Optional[Path] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def get_log_file(self) -> Optional[Path]:
        """Get log file path if logging to file is enabled"""
        if not self.log_to_file:
            return None
        return self.log_file or Path.cwd() / "react-meta.log"
