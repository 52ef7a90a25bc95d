"""Click CLI: print the transitive dependency weight of each direct import of a module."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from depweight.models import AnalysisConfig
from depweight.pipeline import run_report
from depweight.resolver import ResolveError


@click.command()
@click.version_option(version="0.1.0")
@click.argument("module")
@click.option("--exclude-standard", is_flag=True, help="Exclude standard library modules")
@click.option(
    "--source-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Directory imports are resolved from",
)
@click.option(
    "--path", "-p", "search_paths",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    envvar="DEPWEIGHT_PATH",
    help="Extra import search path (repeatable)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details to stderr")
def cli(
    module: str,
    exclude_standard: bool,
    source_dir: Path,
    search_paths: tuple[Path, ...],
    verbose: bool,
):
    """depweight: count the transitive dependencies behind each import of MODULE."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = AnalysisConfig(
        root=module,
        source_dir=source_dir,
        exclude_standard=exclude_standard,
        search_paths=list(search_paths),
    )

    try:
        lines = run_report(config)
    except ResolveError as e:
        raise click.ClickException(str(e))

    for line in lines:
        click.echo(line.format())


if __name__ == "__main__":
    cli()
