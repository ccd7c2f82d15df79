"""
Command-line interface for Presentation Downloader.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from presentation_downloader import __version__
from presentation_downloader.assembler import Assembler
from presentation_downloader.config import DEFAULT_OUTPUT_DIR, DEFAULT_OUTPUT_PDF, DownloaderConfig
from presentation_downloader.converter import ConversionPool
from presentation_downloader.exceptions import (
    AssemblyError,
    InvalidModeError,
    StorageError,
    ValidationError,
    ZeroResourcesError,
)
from presentation_downloader.fetcher import SlideFetcher
from presentation_downloader.pipeline import PresentationPipeline
from presentation_downloader.retention import RetentionManager, RetentionMode
from presentation_downloader.utils import format_file_size, inspect_document

console = Console()
error_console = Console(stderr=True)

USAGE_EXAMPLE = 'presentation-downloader "https://example.com/presentation/slides/svg/"'


def _configure_logging(verbose):
    logger = logging.getLogger("presentation_downloader")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=error_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(message):
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}")
    sys.exit(1)


def _print_menu():
    console.print("\n[bold]What would you like to do?[/bold]\n")
    for mode in RetentionMode:
        console.print(f"{mode.value}. {mode.label}")
    console.print()


def _secure(pipeline, fetcher):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        task = progress.add_task("Downloading slides", total=None)

        def update_progress(resource):
            progress.update(task, description=f"Downloaded slide {resource.index}")

        fetcher.progress_callback = update_progress
        resources = pipeline.secure()
        progress.update(task, completed=True)
    return resources


def _process(pipeline, converter, assembler, mode, resources):
    plan = mode.plan
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console
    ) as progress:
        if plan.convert:
            convert_task = progress.add_task(
                f"Converting with {converter.worker_count} workers", total=len(resources)
            )

            def update_conversion(settled, total, artifact):
                progress.update(convert_task, completed=settled)

            converter.progress_callback = update_conversion

        if plan.assemble:
            assemble_task = progress.add_task("Creating PDF", total=None)

            def update_assembly(current, total):
                progress.update(assemble_task, completed=current, total=total)

            assembler.progress_callback = update_assembly

        return pipeline.process(mode, resources)


def _print_summary(config, result):
    table = Table(title="Run Summary", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Mode", result.mode.label)
    table.add_row("Slides downloaded", str(len(result.resources)))
    if result.mode.plan.convert:
        table.add_row("Slides converted", f"{len(result.artifacts)}/{len(result.resources)}")
    if result.document is not None:
        info = inspect_document(result.document.path)
        table.add_row("PDF", os.path.abspath(result.document.path))
        table.add_row("PDF pages", str(info.num_pages))
        table.add_row("PDF size", format_file_size(info.file_size))
        if result.document.blank_pages:
            table.add_row("Blank pages", ", ".join(map(str, result.document.blank_pages)))
    if result.cleanup is not None:
        table.add_row("Files deleted", str(len(result.cleanup.deleted)))
        if result.cleanup.failed:
            table.add_row("Failed deletions", str(len(result.cleanup.failed)))
    table.add_row("Output directory", os.path.abspath(config.output_dir))

    console.print()
    console.print(table)
    console.print()


@click.command()
@click.version_option(version=__version__)
@click.argument('url', required=False)
@click.option(
    '--mode', '-m',
    help='Retention mode (1-6 or name); prompts after download when omitted',
    type=str
)
@click.option(
    '--output-dir', '-o',
    default=DEFAULT_OUTPUT_DIR,
    help='Directory for SVG and PNG files',
    type=click.Path()
)
@click.option(
    '--output-pdf', '-p',
    default=DEFAULT_OUTPUT_PDF,
    help='Path of the generated PDF',
    type=click.Path()
)
@click.option(
    '--workers', '-w',
    default=None,
    help='Number of parallel conversion workers (default: CPU count - 1, minimum 2)',
    type=int
)
@click.option(
    '--timeout',
    default=None,
    help='Per-request timeout in seconds (default: wait indefinitely)',
    type=float
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(url, mode, output_dir, output_pdf, workers, timeout, verbose):
    """
    Download a presentation's SVG slides and turn them into PNGs and a PDF.

    URL is the slide endpoint; slides are requested as URL/1, URL/2, ...
    until one is missing.

    Examples:

        presentation-downloader "https://example.com/presentation/slides/svg/"

        presentation-downloader https://example.com/svg --mode 4 -o slides
    """
    _configure_logging(verbose)

    if not url:
        console.print("[bold red]✗ Error:[/bold red] URL parameter is required")
        console.print(f"\nUsage: {USAGE_EXAMPLE}")
        sys.exit(1)

    try:
        config = DownloaderConfig(
            base_url=url,
            output_dir=output_dir,
            output_pdf=output_pdf,
            workers=workers,
            request_timeout=timeout,
        )
        selected = RetentionMode.parse(mode) if mode is not None else None
    except ValidationError as e:
        _fail(e)

    console.print(f"[dim]Using base URL: {config.base_url}[/dim]")

    fetcher = SlideFetcher(config)
    converter = ConversionPool(config)
    assembler = Assembler(config)
    pipeline = PresentationPipeline(
        config,
        fetcher=fetcher,
        converter=converter,
        assembler=assembler,
        retention=RetentionManager(),
    )

    try:
        console.print("\n[bold cyan]Downloading and securing all SVG files first...[/bold cyan]")
        resources = _secure(pipeline, fetcher)
        console.print(f"\n[bold green]✓ All {len(resources)} SVG files are now safely saved in:[/bold green] {config.output_dir}")
        console.print("[dim]You can now safely close the presentation[/dim]")

        if selected is None:
            _print_menu()
            choice = click.prompt("Enter your choice (1-6)", type=str)
            selected = RetentionMode.parse(choice)

        result = _process(pipeline, converter, assembler, selected, resources)
        _print_summary(config, result)

        if not result.completed:
            _fail("The selected mode did not complete; slide files were kept")

        console.print("[bold green]✓ Done![/bold green]")

    except ZeroResourcesError as e:
        _fail(e)
    except StorageError as e:
        _fail(e)
    except InvalidModeError as e:
        _fail(e)
    except AssemblyError as e:
        _fail(e)
    finally:
        fetcher.close()


if __name__ == '__main__':
    cli()
