"""CLI entry point for openmedia-minify."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .adapters.archive import ZipArchiver
from .adapters.decoder import Utf16Decoder
from .adapters.storage import FilesystemWorkspace
from .adapters.validator import LxmlValidator
from .config import Settings, load_settings
from .domain.errors import MinifyError
from .domain.models import MissingDatePolicy, WeekPolicy
from .domain.services import BatchService, MinifyService

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_batch_service(settings: Settings, validator: LxmlValidator) -> BatchService:
    """Create a BatchService with configured adapters."""
    workspace = FilesystemWorkspace(settings.paths.workspace_base)
    minifier = MinifyService(
        decoder=Utf16Decoder(),
        validator=validator,
        workspace=workspace,
        missing_date=settings.batch.missing_date,
        marker=settings.selection.marker,
        extension=settings.selection.extension,
    )
    return BatchService(
        minifier=minifier,
        archiver=ZipArchiver(),
        workspace=workspace,
        week_policy=settings.batch.week_policy,
        workers=settings.batch.workers,
    )


def apply_overrides(
    settings: Settings,
    schema: Path | None,
    workers: int | None,
    week_policy: str | None,
    missing_date: str | None,
) -> Settings:
    """Let command line options win over config file values."""
    if schema is not None:
        settings.paths.schema_path = schema
    if workers is not None:
        if workers < 1:
            raise click.BadParameter("must be at least 1", param_hint="--workers")
        settings.batch.workers = workers
    if week_policy is not None:
        settings.batch.week_policy = WeekPolicy(week_policy)
    if missing_date is not None:
        settings.batch.missing_date = MissingDatePolicy(missing_date)
    return settings


@click.command()
@click.option(
    "-i", "--input", "input_dir", required=True,
    type=click.Path(file_okay=False, path_type=Path), help="The input directory",
)
@click.option(
    "-o", "--output", "output_dir", required=True,
    type=click.Path(file_okay=False, path_type=Path), help="The output directory",
)
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.option(
    "--schema", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="XSD to validate against (default: well-formedness only)",
)
@click.option("--workers", type=int, help="Files processed in parallel")
@click.option(
    "--week-policy", type=click.Choice([p.value for p in WeekPolicy]),
    help="How archives pick their year and week",
)
@click.option(
    "--missing-date", type=click.Choice([p.value for p in MissingDatePolicy]),
    help="Fail or degrade files without a date field",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="openmedia-minify")
def cli(
    input_dir: Path,
    output_dir: Path,
    config: str | None,
    schema: Path | None,
    workers: int | None,
    week_policy: str | None,
    missing_date: str | None,
    verbose: bool,
) -> None:
    """Minify OpenMedia as-run logs and archive originals and results."""
    setup_logging(verbose)
    logger.info(f"Openmedia-minify version: {__version__}")

    settings = load_settings(Path(config) if config else None)
    settings = apply_overrides(settings, schema, workers, week_policy, missing_date)

    try:
        validator = LxmlValidator(settings.paths.schema_path)
        service = create_batch_service(settings, validator)
        result = service.run(input_dir, output_dir)
    except MinifyError as e:
        click.echo(f"Error processing folder {input_dir}: {e}", err=True)
        sys.exit(1)

    click.echo(f"PASS/FAIL/TOTAL: {result.passed}/{result.failed}/{result.total}")
    for archive in result.archives:
        click.echo(f"archive: {archive}")


if __name__ == "__main__":
    cli()
