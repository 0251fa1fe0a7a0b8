"""CLI for apple-notes-exporter (list, export, extract-attachments)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from apple_notes_exporter.core.attachments.extractor import extract_directory, extract_file
from apple_notes_exporter.core.tree.listing import render_listing
from apple_notes_exporter.errors import ExportError
from apple_notes_exporter.exporter import Exporter
from apple_notes_exporter.logging_config import configure_logging
from apple_notes_exporter.models.attachment import ExtractionResult
from apple_notes_exporter.script import NotesScript

app = typer.Typer(help="Export Apple Notes folders to HTML files via AppleScript.")

ScriptOption = Annotated[
    Path | None,
    typer.Option("--script", help="AppleScript to use instead of the bundled one"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@app.command(name="list")
def list_cmd(
    script: ScriptOption = None,
    notes: bool = typer.Option(False, "--notes", help="Also show note titles"),
) -> None:
    """List all accounts and their folder trees."""
    try:
        accounts = Exporter(NotesScript(script)).folders()
    except ExportError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from None
    typer.echo(render_listing(accounts, with_notes=notes))


@app.command()
def export(
    folder: str = typer.Argument(
        ...,
        metavar="FOLDER",
        help='Folder to export recursively; use "Account:Folder" to pick an account',
    ),
    output_dir: Path = typer.Argument(..., metavar="OUTPUT_DIR", help="Output directory"),
    script: ScriptOption = None,
    no_extract: bool = typer.Option(
        False, "--no-extract", help="Keep images inline instead of extracting them"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write anything"),
) -> None:
    """Export a folder, found at any depth by breadth-first search, to HTML files."""
    try:
        exporter = Exporter(NotesScript(script))
        stats = exporter.export(folder, output_dir, extract=not no_extract, dry_run=dry_run)
    except (ExportError, ValueError) as e:
        logger.error("Export of {!r} failed: {}", folder, e)
        raise typer.Exit(1) from None

    typer.echo(
        f"Exported {stats.notes_written} notes in {stats.folders_exported} folders, "
        f"extracted {stats.attachments_extracted} attachments"
    )
    if stats.notes_failed or stats.folders_failed or stats.attachments_skipped:
        typer.echo(
            f"Incomplete: {stats.notes_failed} notes failed, "
            f"{stats.folders_failed} folders failed, "
            f"{stats.attachments_skipped} attachments left inline"
        )


def _result_to_dict(result: ExtractionResult) -> dict[str, object]:
    return {
        "path": str(result.path),
        "attachments": [str(a.path) for a in result.attachments],
        "skipped": [{"position": s.position, "reason": s.reason} for s in result.skipped],
        "error": result.error,
    }


@app.command(name="extract-attachments")
def extract_attachments(
    path: Path = typer.Argument(..., help="HTML file or directory of exported notes"),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Files processed in parallel"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Move inline base64 images of already exported notes into files."""
    if not path.exists():
        logger.error("Path not found: {}", path)
        raise typer.Exit(1)

    if path.is_dir():
        results = extract_directory(path, workers=workers)
    else:
        try:
            results = [extract_file(path)]
        except OSError as e:
            logger.error("Cannot extract attachments from {}: {}", path, e)
            raise typer.Exit(1) from None

    if output_json:
        typer.echo(json.dumps([_result_to_dict(r) for r in results], indent=2))
        return

    for r in results:
        if r.error is not None:
            typer.echo(f"  {r.path}: error: {r.error}")
        elif r.attachments or r.skipped:
            line = f"  {r.path}: {len(r.attachments)} extracted"
            if r.skipped:
                line += f", {len(r.skipped)} left inline"
            typer.echo(line)
    total = sum(len(r.attachments) for r in results)
    typer.echo(f"Processed {len(results)} files, extracted {total} attachments")
