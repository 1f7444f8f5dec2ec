"""
End-to-end metadata run over a project tree.

Discovers component files, extracts each one in discovery order, aggregates
the results and writes project-metadata.json plus the index.html meta tags.
Files that cannot be read or parsed are recorded as diagnostics and skipped;
the run itself only fails when the parser cannot be set up at all.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .extraction.aggregator import aggregate
from .extraction.extractor import ComponentExtractor
from .models.config import ScanConfig
from .models.diagnostics import DiagnosticKind, DiagnosticLog
from .models.metadata import ComponentMetadata, ProjectMetadata
from .output.meta_tags import update_index_html
from .output.metadata_writer import write_project_metadata
from .parser.base import ParseFailure
from .parser.source_reader import SourceReader, SourceReadError
from .scanner.workspace_scanner import WorkspaceScanner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Path], None]


@dataclass
class RunReport:
    """Outcome of one pipeline run"""
    root: Path
    metadata: Optional[ProjectMetadata] = None  # None when no components were found
    files_discovered: int = 0
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    metadata_path: Optional[Path] = None
    index_html_updated: bool = False
    duration_seconds: float = 0.0

    @property
    def files_processed(self) -> int:
        return self.metadata.component_count if self.metadata is not None else 0

    @property
    def files_failed(self) -> int:
        return len(self.diagnostics.failed_files)

    @property
    def success_rate(self) -> float:
        if self.files_discovered == 0:
            return 1.0
        return self.files_processed / self.files_discovered

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "files_discovered": self.files_discovered,
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "diagnostic_count": len(self.diagnostics),
            "metadata_path": str(self.metadata_path) if self.metadata_path else None,
            "index_html_updated": self.index_html_updated,
            "duration_seconds": self.duration_seconds,
            "success_rate": self.success_rate
        }


class MetadataPipeline:
    """
    Runs discovery, extraction, aggregation and output for one project.

    Args:
        config: Scan configuration; defaults to ScanConfig()
        extractor: Per-file extractor; defaults to one on the shared parser
        dry_run: Extract and aggregate without writing anything
        output_path: Overrides the metadata document location
        progress_callback: Called as (index, total, path) before each file
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        extractor: Optional[ComponentExtractor] = None,
        dry_run: bool = False,
        output_path: Optional[Path] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.config = config or ScanConfig()
        self.extractor = extractor or ComponentExtractor()
        self.scanner = WorkspaceScanner(self.config)
        self.reader = SourceReader(max_file_size=self.config.max_file_size_bytes)
        self.dry_run = dry_run
        self.output_path = output_path
        self.progress_callback = progress_callback

    def run(self, root: Union[str, Path]) -> RunReport:
        """
        Process every component under root.

        Raises:
            FileNotFoundError: If root is not a directory
            TreeSitterError: If the TSX grammar cannot be loaded
        """
        start_time = time.perf_counter()
        root = Path(root).resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Project directory does not exist: {root}")

        report = RunReport(root=root)
        paths = self.scanner.find_components(root)
        report.files_discovered = len(paths)

        if not paths:
            logger.info(f"No React components found in {root}")
            report.duration_seconds = time.perf_counter() - start_time
            return report

        components: List[ComponentMetadata] = []
        total = len(paths)
        for index, path in enumerate(paths, start=1):
            if self.progress_callback:
                self.progress_callback(index, total, path)

            component = self.process_file(path, root, report.diagnostics)
            if component is not None:
                components.append(component)

        report.metadata = aggregate(components)
        logger.info(
            f"Extracted metadata for {report.files_processed}/{total} components "
            f"({report.files_failed} skipped)"
        )

        if not self.dry_run:
            self._write_outputs(report)

        report.duration_seconds = time.perf_counter() - start_time
        return report

    def process_file(
        self,
        path: Path,
        root: Path,
        diagnostics: DiagnosticLog
    ) -> Optional[ComponentMetadata]:
        """Read and extract one file; None if it was skipped"""
        relative_path = path.relative_to(root).as_posix()

        try:
            content, _encoding = self.reader.read(path)
        except SourceReadError as e:
            logger.error(f"Error reading {relative_path}: {e}")
            diagnostics.record(DiagnosticKind.READ_FAILURE, str(e), file_path=relative_path)
            return None

        file_diagnostics = DiagnosticLog()
        try:
            component = self.extractor.extract(content, path, file_diagnostics)
        except ParseFailure as e:
            logger.error(f"Error processing {relative_path}: {e}")
            diagnostics.record(
                DiagnosticKind.PARSE_FAILURE,
                str(e),
                file_path=relative_path,
                line=e.line,
                column=e.column
            )
            return None

        # The engine labels node failures with the absolute path
        for entry in file_diagnostics:
            diagnostics.record(
                entry.kind,
                entry.message,
                file_path=relative_path,
                line=entry.line,
                column=entry.column,
                node_type=entry.node_type
            )

        return component.model_copy(update={"file_path": relative_path})

    def _write_outputs(self, report: RunReport) -> None:
        metadata_path = self.output_path or self.config.metadata_path(report.root)
        try:
            report.metadata_path = write_project_metadata(report.metadata, metadata_path)
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write {metadata_path}: {e}")
            report.diagnostics.record(DiagnosticKind.WRITE_FAILURE, str(e), file_path=str(metadata_path))

        if not self.config.update_index_html:
            return

        index_path = self.config.index_html(report.root)
        try:
            report.index_html_updated = update_index_html(
                index_path,
                report.metadata,
                site_title=self.config.site_title,
                description_count=self.config.description_count,
                social_count=self.config.social_count
            )
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to update {index_path}: {e}")
            report.diagnostics.record(DiagnosticKind.WRITE_FAILURE, str(e), file_path=str(index_path))
