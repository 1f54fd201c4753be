from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...domain.services.mapping.transformability import can_transform
from ...infrastructure.io.exceptions import DataSourceError
from ...infrastructure.repositories.schema_repository import load_schema

console = Console()


@click.command()
@click.argument("schema_file", type=click.Path(dir_okay=False, path_type=Path))
def schema_command(schema_file: Path) -> None:
    """List the tables and columns declared in SCHEMA_FILE."""
    try:
        schema = load_schema(schema_file)
    except DataSourceError as exc:
        raise click.ClickException(str(exc)) from exc

    title = schema.database_name or schema_file.stem
    console.print(f"[bold]{title}[/bold]: {len(schema.tables)} table(s)")
    for schema_table in schema.tables:
        table = Table(title=f"{schema_table.table_name} ({schema_table.csv_type or '-'})")
        table.add_column("Column", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Required", justify="center")
        table.add_column("Max length", justify="right")
        table.add_column("Transformable", justify="center")
        for column in schema_table.columns:
            table.add_row(
                column.name,
                column.data_type,
                "yes" if column.is_required else "",
                "" if column.max_length is None else str(column.max_length),
                "yes" if can_transform(column) else "",
            )
        console.print(table)
