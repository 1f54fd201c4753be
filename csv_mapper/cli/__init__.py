import click

from .commands.columns import columns_command
from .commands.match import match_command
from .commands.preview import preview_command
from .commands.schema import schema_command


@click.group()
def app() -> None:
    pass


app.add_command(columns_command, name="columns")
app.add_command(schema_command, name="schema")
app.add_command(match_command, name="match")
app.add_command(preview_command, name="preview")
__all__ = ["app"]
