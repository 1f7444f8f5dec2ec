"""
Unit tests for metadata, diagnostic and configuration models.
"""

import json
import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import ValidationError

from core.models.config import GlobalSettings, ScanConfig
from core.models.diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from core.models.metadata import ComponentMetadata, ProjectMetadata, format_timestamp


class TestComponentMetadata:
    """Test ComponentMetadata validation and serialization"""

    def test_camel_case_serialization(self):
        component = ComponentMetadata(
            file_path="src/Hero.jsx",
            title="Hero",
            description="Welcome",
            text_content=["Welcome", "Sign up"]
        )

        assert component.to_dict() == {
            "filePath": "src/Hero.jsx",
            "title": "Hero",
            "description": "Welcome",
            "textContent": ["Welcome", "Sign up"]
        }

    def test_populate_by_alias(self):
        component = ComponentMetadata.model_validate({
            "filePath": "a.jsx", "title": "a", "description": "", "textContent": []
        })
        assert component.file_path == "a.jsx"

    def test_duplicates_rejected(self):
        with pytest.raises(ValidationError):
            ComponentMetadata(file_path="a.jsx", text_content=["Same", "Same"])

    def test_frozen(self):
        component = ComponentMetadata(file_path="a.jsx")
        with pytest.raises(ValidationError):
            component.title = "changed"

    def test_copy_with_new_path(self):
        component = ComponentMetadata(file_path="/abs/a.jsx", title="a")
        relative = component.model_copy(update={"file_path": "a.jsx"})

        assert relative.file_path == "a.jsx"
        assert component.file_path == "/abs/a.jsx"


class TestProjectMetadata:
    """Test ProjectMetadata document format"""

    def test_timestamp_format(self):
        stamp = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)
        assert format_timestamp(stamp) == "2024-05-06T07:08:09.123Z"

    def test_timestamp_converts_to_utc(self):
        stamp = datetime(2024, 5, 6, 9, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(stamp) == "2024-05-06T07:00:00.000Z"

    def test_naive_timestamp_is_utc(self):
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_to_json(self):
        project = ProjectMetadata(
            generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            components=[ComponentMetadata(file_path="Café.jsx", title="Café", text_content=["Grüße"])]
        )
        document = project.to_json()

        assert "Grüße" in document
        assert '  "generatedAt"' in document
        data = json.loads(document)
        assert data["generatedAt"] == "2024-01-01T00:00:00.000Z"
        assert data["components"][0]["textContent"] == ["Grüße"]
        assert list(data.keys()) == ["generatedAt", "components"]

    def test_round_trip_from_dict(self):
        project = ProjectMetadata(components=[ComponentMetadata(file_path="a.jsx", title="a")])
        restored = ProjectMetadata.from_dict(json.loads(project.to_json()))

        assert restored.components == project.components


class TestDiagnosticLog:
    """Test diagnostic collection"""

    def setup_method(self):
        self.log = DiagnosticLog()

    def test_empty_log_is_falsy(self):
        assert not self.log
        assert len(self.log) == 0
        assert self.log.failed_files == []

    def test_record_and_filter(self):
        self.log.record(DiagnosticKind.PARSE_FAILURE, "bad syntax", file_path="a.jsx", line=3, column=4)
        self.log.record(DiagnosticKind.NODE_PROCESSING_FAILURE, "odd node", file_path="b.jsx", node_type="pair")
        self.log.record(DiagnosticKind.READ_FAILURE, "unreadable", file_path="c.jsx")
        self.log.record(DiagnosticKind.PARSE_FAILURE, "again", file_path="a.jsx")

        assert len(self.log) == 4
        assert len(self.log.by_kind(DiagnosticKind.PARSE_FAILURE)) == 2
        assert [d.message for d in self.log.for_file("b.jsx")] == ["odd node"]
        assert self.log.failed_files == ["a.jsx", "c.jsx"]

    def test_location(self):
        diagnostic = self.log.record(DiagnosticKind.PARSE_FAILURE, "x", file_path="a.jsx", line=3, column=4)
        assert diagnostic.location == "a.jsx:3:4"
        assert Diagnostic(kind=DiagnosticKind.READ_FAILURE, file_path="b.jsx", message="y").location == "b.jsx"
        assert Diagnostic(kind=DiagnosticKind.READ_FAILURE, file_path="b.jsx", message="y", line=7).location == "b.jsx:7"

    def test_extend(self):
        other = DiagnosticLog()
        other.record(DiagnosticKind.WRITE_FAILURE, "disk full", file_path="out.json")
        self.log.extend(other)

        assert [d.kind for d in self.log] == [DiagnosticKind.WRITE_FAILURE]


class TestScanConfig:
    """Test ScanConfig defaults and validation"""

    def test_defaults(self):
        config = ScanConfig()

        assert config.extensions == [".jsx", ".tsx", ".js", ".ts"]
        assert config.skip_directories == ["node_modules", "dist", "build"]
        assert config.metadata_filename == "project-metadata.json"
        assert config.index_html_path == "public/index.html"
        assert config.site_title == "React Application"
        assert config.description_count == 5
        assert config.social_count == 3
        assert config.max_file_size_bytes == 10 * 1024 * 1024

    def test_extension_normalization(self):
        config = ScanConfig(extensions=["JSX", ".tsx", "jsx"])
        assert config.extensions == [".jsx", ".tsx"]

    def test_empty_extensions_rejected(self):
        with pytest.raises(ValidationError):
            ScanConfig(extensions=[])

    def test_absolute_output_path_rejected(self):
        with pytest.raises(ValidationError):
            ScanConfig(metadata_filename="/tmp/out.json")

    def test_paths(self):
        config = ScanConfig()
        root = Path("/project")

        assert config.metadata_path(root) == root / "project-metadata.json"
        assert config.index_html(root) == root / "public" / "index.html"

    def test_round_trip(self):
        config = ScanConfig(site_title="My Shop", skip_hidden=False)
        assert ScanConfig.from_dict(config.to_dict()) == config


class TestGlobalSettings:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REACT_META_LOG_LEVEL", raising=False)
        settings = GlobalSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.get_log_file() is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("REACT_META_LOG_LEVEL", "debug")
        settings = GlobalSettings(_env_file=None)

        assert settings.log_level == "DEBUG"

    def test_log_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REACT_META_LOG_TO_FILE", "true")
        monkeypatch.setenv("REACT_META_LOG_FILE", str(tmp_path / "run.log"))
        settings = GlobalSettings(_env_file=None)

        assert settings.get_log_file() == tmp_path / "run.log"

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("REACT_META_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            GlobalSettings(_env_file=None)
