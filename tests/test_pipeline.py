"""
Integration tests for MetadataPipeline over temporary project trees.
"""

import json
import shutil
import tempfile
import pytest
from pathlib import Path
from unittest.mock import Mock, patch

from core.models.config import ScanConfig
from core.models.diagnostics import DiagnosticKind
from core.output.meta_tags import BLOCK_START
from core.parser.source_reader import SourceReadError
from core.pipeline import MetadataPipeline, RunReport

from tests.fixtures.component_samples import BROKEN_SOURCE, HERO_COMPONENT, MARKUP_ONLY, PRICING_EXPORT

INDEX_HTML = "<html><head><title>Shop</title></head><body></body></html>"


class TestMetadataPipeline:
    """Test end-to-end runs"""

    def setup_method(self):
        """Create a small React project"""
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)
        self._write("src/components/Hero.jsx", HERO_COMPONENT)
        self._write("src/components/Card.tsx", MARKUP_ONLY)
        self._write("src/data/Pricing.js", PRICING_EXPORT + "\nconst P = () => <p>Plans</p>;\n")
        self._write("node_modules/lib/Ignored.jsx", MARKUP_ONLY)
        self._write("public/index.html", INDEX_HTML)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def test_full_run(self):
        report = MetadataPipeline().run(self.root)

        assert isinstance(report, RunReport)
        assert report.files_discovered == 3
        assert report.files_processed == 3
        assert report.files_failed == 0
        assert [c.file_path for c in report.metadata.components] == [
            "src/components/Card.tsx",
            "src/components/Hero.jsx",
            "src/data/Pricing.js",
        ]

        data = json.loads((self.root / "project-metadata.json").read_text(encoding="utf-8"))
        assert data["components"][0] == {
            "filePath": "src/components/Card.tsx",
            "title": "Card",
            "description": "Hello World",
            "textContent": ["Hello World"]
        }
        assert data["generatedAt"].endswith("Z")
        assert report.metadata_path == self.root.resolve() / "project-metadata.json"

        html = (self.root / "public" / "index.html").read_text(encoding="utf-8")
        assert report.index_html_updated is True
        assert html.count(BLOCK_START) == 1
        assert '<meta property="og:description" content="Hello World | Build faster | Ship sooner" />' in html

    def test_parse_failure_skips_file(self):
        self._write("src/components/Broken.jsx", BROKEN_SOURCE)

        report = MetadataPipeline().run(self.root)

        assert report.files_discovered == 4
        assert report.files_processed == 3
        assert report.diagnostics.failed_files == ["src/components/Broken.jsx"]
        failure = report.diagnostics.by_kind(DiagnosticKind.PARSE_FAILURE)[0]
        assert failure.line is not None
        assert "src/components/Broken.jsx" not in [c.file_path for c in report.metadata.components]

    def test_read_failure_skips_file(self):
        original_read = MetadataPipeline(dry_run=True).reader.read

        def flaky_read(path):
            if path.name == "Card.tsx":
                raise SourceReadError("cannot decode")
            return original_read(path)

        pipeline = MetadataPipeline(dry_run=True)
        with patch.object(pipeline.reader, "read", side_effect=flaky_read):
            report = pipeline.run(self.root)

        assert report.files_processed == 2
        entries = report.diagnostics.by_kind(DiagnosticKind.READ_FAILURE)
        assert [e.file_path for e in entries] == ["src/components/Card.tsx"]

    def test_dry_run_writes_nothing(self):
        report = MetadataPipeline(dry_run=True).run(self.root)

        assert report.files_processed == 3
        assert report.metadata_path is None
        assert not (self.root / "project-metadata.json").exists()
        assert BLOCK_START not in (self.root / "public" / "index.html").read_text(encoding="utf-8")

    def test_html_update_disabled(self):
        config = ScanConfig(update_index_html=False)
        report = MetadataPipeline(config).run(self.root)

        assert report.index_html_updated is False
        assert (self.root / "project-metadata.json").exists()
        assert BLOCK_START not in (self.root / "public" / "index.html").read_text(encoding="utf-8")

    def test_missing_index_html(self):
        (self.root / "public" / "index.html").unlink()
        report = MetadataPipeline().run(self.root)

        assert report.index_html_updated is False
        assert (self.root / "project-metadata.json").exists()

    def test_output_path_override(self, tmp_path):
        output = tmp_path / "out" / "meta.json"
        report = MetadataPipeline(output_path=output).run(self.root)

        assert report.metadata_path == output
        assert output.exists()
        assert not (self.root / "project-metadata.json").exists()

    def test_write_failure_is_recorded(self):
        with patch("core.pipeline.write_project_metadata", side_effect=PermissionError("read-only")):
            report = MetadataPipeline().run(self.root)

        assert report.metadata is not None
        assert report.metadata_path is None
        entries = report.diagnostics.by_kind(DiagnosticKind.WRITE_FAILURE)
        assert len(entries) == 1
        assert "read-only" in entries[0].message

    def test_encoding_failure_is_recorded(self):
        error = UnicodeEncodeError("utf-8", "\ud83d", 0, 1, "surrogates not allowed")
        with patch("core.pipeline.write_project_metadata", side_effect=error), \
                patch("core.pipeline.update_index_html", side_effect=error):
            report = MetadataPipeline().run(self.root)

        assert report.metadata is not None
        assert report.index_html_updated is False
        assert len(report.diagnostics.by_kind(DiagnosticKind.WRITE_FAILURE)) == 2

    def test_astral_escape_reaches_outputs(self):
        self._write(
            "src/components/Emoji.jsx",
            "import React from 'react';\n"
            "export const Emoji = () => <Badge label={\"Smile \\uD83D\\uDE00 today\"} />;\n"
        )

        report = MetadataPipeline().run(self.root)

        assert report.files_failed == 0
        assert report.diagnostics.by_kind(DiagnosticKind.WRITE_FAILURE) == []
        data = json.loads((self.root / "project-metadata.json").read_text(encoding="utf-8"))
        emoji = [c for c in data["components"] if c["filePath"] == "src/components/Emoji.jsx"][0]
        assert emoji["textContent"] == ["Smile \U0001F600 today"]
        assert "Smile \U0001F600 today" in (self.root / "public" / "index.html").read_text(encoding="utf-8")

    def test_progress_callback(self):
        callback = Mock()
        MetadataPipeline(dry_run=True, progress_callback=callback).run(self.root)

        assert callback.call_count == 3
        indices = [call.args[0] for call in callback.call_args_list]
        totals = {call.args[1] for call in callback.call_args_list}
        assert indices == [1, 2, 3]
        assert totals == {3}
        assert callback.call_args_list[0].args[2].name == "Card.tsx"

    def test_no_components(self, tmp_path):
        (tmp_path / "notes.txt").write_text("nothing here", encoding="utf-8")

        report = MetadataPipeline().run(tmp_path)

        assert report.metadata is None
        assert report.files_discovered == 0
        assert report.files_processed == 0
        assert not (tmp_path / "project-metadata.json").exists()

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MetadataPipeline().run(tmp_path / "missing")

    def test_report_to_dict(self):
        report = MetadataPipeline(dry_run=True).run(self.root)
        summary = report.to_dict()

        assert summary["files_discovered"] == 3
        assert summary["files_processed"] == 3
        assert summary["success_rate"] == 1.0
        assert summary["metadata_path"] is None
