from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...config import ConfigLoader
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.exceptions import DataSourceError
from .options import config_option, verbose_option

console = Console()


@click.command()
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@config_option
@verbose_option
def columns_command(csv_file: Path, config_file: Path | None, verbose: int) -> None:
    """Show the columns of CSV_FILE with sample values and inferred types."""
    config = ConfigLoader.load(config_file=config_file)
    container = DependencyContainer(config=config, verbose=verbose, console=console)
    try:
        columns = container.create_csv_sampler().parse_csv_file(csv_file)
    except DataSourceError as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title=f"Columns in {csv_file.name}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Column", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Samples")
    for column in columns:
        table.add_row(
            str(column.index),
            column.name,
            column.inferred_type.value,
            ", ".join(column.sample_values),
        )
    console.print(table)
