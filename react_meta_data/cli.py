"""
CLI commands for react-meta-data.

Provides the `react-meta` command-line interface for extracting project
metadata, inspecting single components and checking the content classifier.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.loader import ConfigurationLoader
from core.extraction.classifier import rejection_reason
from core.extraction.extractor import ComponentExtractor
from core.models.config import GlobalSettings
from core.models.diagnostics import DiagnosticLog
from core.parser.base import ParseFailure, TreeSitterError
from core.parser.source_reader import SourceReader, SourceReadError
from core.pipeline import MetadataPipeline, RunReport

from . import __version__

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

MAX_DIAGNOSTICS_SHOWN = 20


def _configure_logging(verbose: bool) -> None:
    settings = GlobalSettings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)

    handlers = [RichHandler(console=err_console, show_path=False, rich_tracebacks=verbose)]
    log_file = settings.get_log_file()
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)


@click.group()
@click.version_option(version=__version__, prog_name="react-meta")
def main():
    """
    React Meta Data CLI.

    Extract human-readable text from React components and generate SEO metadata.
    """
    pass


@main.command()
@click.argument('path', default='.', required=False)
@click.option(
    '--dry-run', '-n',
    is_flag=True,
    help='Extract and report without writing any files'
)
@click.option(
    '--no-html',
    is_flag=True,
    help='Do not update meta tags in index.html'
)
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Write the metadata document to FILE instead of the project root'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Show debug logging and every diagnostic'
)
def extract(path: str, dry_run: bool, no_html: bool, output: Optional[Path], verbose: bool):
    """Extract metadata for every component under PATH (default: current directory)."""
    _configure_logging(verbose)

    project_path = Path(path)
    if not project_path.is_dir():
        console.print(f"[red]❌ Project directory not found: {project_path}[/red]")
        sys.exit(1)

    config = ConfigurationLoader().load_scan_config(project_path)
    if no_html:
        config = config.model_copy(update={"update_index_html": False})

    console.print(f"[blue]🔍 Extracting component metadata from {project_path.resolve()}[/blue]")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task("Finding React components...", total=None)

            def on_file(index: int, total: int, file_path: Path) -> None:
                progress.update(
                    task,
                    description=f"Processing {file_path.name}",
                    completed=index - 1,
                    total=total
                )

            pipeline = MetadataPipeline(
                config,
                dry_run=dry_run,
                output_path=output,
                progress_callback=on_file
            )
            report = pipeline.run(project_path)

    except (TreeSitterError, OSError) as e:
        console.print(f"[red]❌ Extraction failed: {e}[/red]")
        sys.exit(1)

    _print_report(report, dry_run, verbose)


def _print_report(report: RunReport, dry_run: bool, verbose: bool) -> None:
    if report.metadata is None:
        console.print("[yellow]⚠️  No React components found in the workspace[/yellow]")
        return

    table = Table(title="Extracted Components")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Texts", justify="right")
    table.add_column("Description", style="dim")

    for component in report.metadata.components:
        table.add_row(
            component.file_path,
            component.title,
            str(len(component.text_content)),
            component.description
        )

    console.print(table)
    _print_diagnostics(report.diagnostics, verbose)

    console.print(
        f"\n[green]📊 {report.files_processed}/{report.files_discovered} components processed "
        f"in {report.duration_seconds:.2f}s[/green]"
    )
    if report.files_failed:
        console.print(f"[yellow]⚠️  {report.files_failed} files skipped[/yellow]")

    if dry_run:
        console.print("[dim]Dry run: no files written[/dim]")
        return

    if report.metadata_path:
        console.print(f"[green]✅ Metadata saved to {report.metadata_path}[/green]")
    if report.index_html_updated:
        console.print("[green]✅ Meta tags updated in index.html[/green]")


def _print_diagnostics(diagnostics: DiagnosticLog, verbose: bool) -> None:
    if not diagnostics:
        return

    entries = list(diagnostics)
    shown = entries if verbose else entries[:MAX_DIAGNOSTICS_SHOWN]

    table = Table(title="Diagnostics")
    table.add_column("Kind", style="yellow", no_wrap=True)
    table.add_column("Location", style="cyan")
    table.add_column("Message", style="white")
    for entry in shown:
        table.add_row(entry.kind.value, entry.location, entry.message)
    console.print(table)

    if len(shown) < len(entries):
        console.print(f"[dim]... {len(entries) - len(shown)} more (use --verbose to show all)[/dim]")


@main.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--json', 'as_json',
    is_flag=True,
    help='Print the component metadata as JSON'
)
def inspect(file: Path, as_json: bool):
    """Extract and show the metadata of a single component FILE."""
    _configure_logging(False)

    diagnostics = DiagnosticLog()
    try:
        content, _encoding = SourceReader().read(file)
        component = ComponentExtractor().extract(content, file, diagnostics)
    except ParseFailure as e:
        err_console.print(f"[red]❌ Cannot parse {file}: {e}[/red]")
        sys.exit(1)
    except (SourceReadError, TreeSitterError) as e:
        err_console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(component.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(f"[bold]{component.title}[/bold] [dim]({component.file_path})[/dim]")
    console.print(f"Description: {component.description or '-'}")

    table = Table(title="Text Content")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Text", style="white")
    for index, text in enumerate(component.text_content, start=1):
        table.add_row(str(index), text)
    console.print(table)

    _print_diagnostics(diagnostics, verbose=True)


@main.command()
@click.argument('texts', nargs=-1, required=True)
def classify(texts: Tuple[str, ...]):
    """Show whether each TEXT would be kept as content."""
    table = Table(title="Classifier")
    table.add_column("Text", style="cyan")
    table.add_column("Verdict")
    table.add_column("Rule", style="dim")

    for text in texts:
        reason = rejection_reason(text.strip())
        if reason is None:
            table.add_row(text, "[green]content[/green]", "")
        else:
            table.add_row(text, "[red]rejected[/red]", reason)

    console.print(table)


if __name__ == "__main__":
    main()
