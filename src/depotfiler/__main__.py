"""CLI entry point for depotfiler."""

import fnmatch
import logging
import sys
from pathlib import Path

import click

from .adapters.metadata import PikePdfAdapter
from .adapters.storage import FilesystemAdapter
from .adapters.text import PdfPlumberAdapter
from .config import Settings, load_settings
from .domain.models import RenameOutcome, RenameResult
from .domain.services import RenamingService

MAX_PATH_LENGTH = 4096


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def validate_path_length(
    ctx: click.Context, param: click.Parameter, value: Path
) -> Path:
    if len(str(value)) > MAX_PATH_LENGTH:
        raise click.BadParameter(f"Path too long (max {MAX_PATH_LENGTH} characters)")
    return value


def matches_patterns(name: str, patterns: list[str]) -> bool:
    """Case-insensitive glob match against any pattern."""
    return any(fnmatch.fnmatch(name.lower(), p.lower()) for p in patterns)


def collect_pdfs(path: Path, recursive: bool, patterns: list[str]) -> list[Path]:
    """Collect matching files from path (file or directory)."""
    if path.is_file():
        return [path] if matches_patterns(path.name, patterns) else []
    candidates = path.rglob("*") if recursive else path.glob("*")
    return sorted(
        p for p in candidates if p.is_file() and matches_patterns(p.name, patterns)
    )


def build_service(settings: Settings, root: Path) -> RenamingService:
    return RenamingService(
        text_extractor=PdfPlumberAdapter(),
        storage=FilesystemAdapter(root),
        metadata=PikePdfAdapter() if settings.metadata.enabled else None,
        write_sidecar=settings.metadata.write_sidecar,
        update_pdf=settings.metadata.update_pdf,
        max_file_size=settings.rename.max_file_size,
        max_filename_length=settings.rename.max_filename_length,
    )


def format_result(result: RenameResult) -> str:
    """One status line per file."""
    name = result.source_path.name
    if result.success and result.target_path is not None:
        if result.outcome == RenameOutcome.UNCHANGED:
            return f"= {name}"
        return f"✓ {name} -> {result.target_path.name}"
    if result.skipped:
        return f"- {name}: {result.outcome.value}"
    return f"✗ {name}: {result.outcome.value} {result.errors}"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Depotfiler - rename brokerage statement PDFs."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument(
    "path",
    type=click.Path(exists=True, path_type=Path),
    callback=validate_path_length,
)
@click.option("--no-recursive", is_flag=True, help="Ignore subfolders")
@click.option("--dry-run", is_flag=True, help="Show what would be renamed")
@click.pass_context
def rename(ctx: click.Context, path: Path, no_recursive: bool, dry_run: bool) -> None:
    """Rename statements in PATH after their content."""
    settings = load_settings(ctx.obj["config_path"])
    recursive = settings.rename.recursive and not no_recursive
    dry_run = dry_run or settings.rename.dry_run

    pdfs = collect_pdfs(path, recursive, settings.rename.patterns)
    if not pdfs:
        click.echo("No files to rename")
        return

    root = path if path.is_dir() else path.parent
    service = build_service(settings, root)

    results = service.process_many(pdfs, dry_run=dry_run)

    failed = 0
    for result in results:
        line = format_result(result)
        if result.success or result.skipped:
            click.echo(line)
        else:
            failed += 1
            click.echo(line, err=True)

    done = sum(1 for r in results if r.success)
    skipped = sum(1 for r in results if r.skipped)
    verb = "Planned" if dry_run else "Renamed"
    click.echo(f"\n{verb}: {done}, skipped: {skipped}, errors: {failed}")
    if failed:
        sys.exit(1)


@cli.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    callback=validate_path_length,
)
@click.pass_context
def inspect(ctx: click.Context, file: Path) -> None:
    """Show what would be extracted from a single statement."""
    settings = load_settings(ctx.obj["config_path"])
    service = build_service(settings, file.parent)

    result = service.inspect(file)

    if result.record is None:
        click.echo(f"{result.outcome.value}: {result.errors}", err=True)
        sys.exit(1)

    click.echo(f"date: {result.record.date}")
    click.echo(f"category: {result.record.category}")
    click.echo(f"isin: {result.record.identifier or '-'}")
    click.echo(f"asset: {result.record.asset_label}")
    click.echo(f"text_length: {result.text_length}")
    if result.target_path:
        click.echo(f"filename: {result.target_path.name}")


if __name__ == "__main__":
    cli()
