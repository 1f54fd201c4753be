"""Match command - auto-match a CSV file against one table of a schema.

This module is a thin adapter between click and the mapping session:
1. Load the schema and sample the CSV
2. Re-apply previously saved mappings, or auto-match when none apply
3. Validate, print the report and fuzzy suggestions for unmapped columns
4. Save the mapping when it is valid and ``--save`` is given
"""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...config import ConfigLoader
from ...constants import Sentinels
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.exceptions import MapperError
from .options import config_option, verbose_option

console = Console()


def _resolve_csv_type(requested: str | None, available: list[str]) -> str:
    if requested:
        return requested
    if len(available) == 1:
        return available[0]
    raise click.UsageError(
        f"--csv-type is required; schema declares: {', '.join(available) or 'none'}"
    )


@click.command()
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("schema_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--csv-type", "csv_type", help="csvType of the schema table to map to")
@click.option(
    "--saved",
    "saved_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Re-apply mappings from this file before auto-matching",
)
@click.option(
    "--save",
    "save_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the mapping to this file when it is valid",
)
@config_option
@verbose_option
def match_command(
    csv_file: Path,
    schema_file: Path,
    csv_type: str | None,
    saved_file: Path | None,
    save_file: Path | None,
    config_file: Path | None,
    verbose: int,
) -> None:
    """Auto-match the columns of CSV_FILE to a table in SCHEMA_FILE.

    Examples:

    \b
        # Match patients.csv to the table registered for csvType PatientStudy
        csv-mapper match patients.csv schema.json --csv-type PatientStudy

    \b
        # Start from a previous run and save the result
        csv-mapper match patients.csv schema.json --saved mappings.json --save mappings.json
    """
    config = ConfigLoader.load(config_file=config_file)
    container = DependencyContainer(config=config, verbose=verbose, console=console)
    session = container.create_mapping_session()
    logger = container.create_logger()

    try:
        schema = session.load_schema(schema_file)
        resolved = _resolve_csv_type(csv_type, schema.csv_types)
        session.load_csv(resolved, csv_file)
        applied = 0
        if saved_file is not None:
            session.load_saved(saved_file)
            applied = session.apply_saved(resolved)
            logger.verbose(f"Re-applied {applied} saved mapping(s)")
        # Nothing usable in the saved file: start from name matching instead.
        matches = session.auto_match(resolved) if applied == 0 else {}
        report = session.validate(resolved)
    except MapperError as exc:
        raise click.ClickException(str(exc)) from exc

    table_session = session.table(resolved)
    table = Table(title=f"{table_session.table.table_name} <- {csv_file.name}")
    table.add_column("Database column", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("CSV column")
    table.add_column("Status")
    for selection in table_session.selections:
        name = selection.db_column.name
        source = selection.selected_csv_column if selection.is_mapped else Sentinels.NO_MAPPING
        if selection.transformation_kind is not None:
            source = f"{source} [dim]({selection.transformation_kind.value})[/dim]"
        if name in report.errors:
            status = f"[red]{report.errors[name]}[/red]"
        elif selection.warning:
            status = f"[yellow]{selection.warning}[/yellow]"
        elif name in matches:
            status = "[green]auto-matched[/green]"
        else:
            status = "[green]ok[/green]"
        table.add_row(name, selection.db_column.data_type, source or "", status)
    console.print(table)
    for selection in table_session.selections:
        if selection.is_mapped:
            continue
        hints = session.suggest(resolved, selection.db_column.name)
        if hints:
            ranked = ", ".join(f"{h.csv_column} ({h.score:.2f})" for h in hints)
            console.print(f"[dim]Suggested for {selection.db_column.name}: {ranked}[/dim]")
    console.print(report.summary())

    if save_file is not None:
        if not report.is_valid:
            logger.error("Mapping is not valid; nothing was saved")
        elif not session.save(save_file):
            raise click.ClickException(f"Failed to save mappings to {save_file}")

    logger.log_final_stats()
    if not report.is_valid:
        raise click.ClickException(
            f"Validation failed with {len(report.errors)} error(s)"
        )
