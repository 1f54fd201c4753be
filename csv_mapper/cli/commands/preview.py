from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...config import ConfigLoader
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.exceptions import MapperError
from ...transformations import presets
from ...transformations.base import Parameters, TransformationKind


def _parse_kind(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> TransformationKind | None:
    if value is None:
        return None
    try:
        return TransformationKind.parse(value)
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in TransformationKind)
        raise click.BadParameter(f"{exc}. Choose from: {choices}") from exc


def _parse_params(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> Parameters:
    """Turn ``KEY=VALUE`` pairs into parameters.

    ``Mappings.Male=M`` adds an entry to the ``Mappings`` dictionary and
    ``true``/``false`` become booleans.
    """
    params: Parameters = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}")
        if "." in key:
            outer, _, inner = key.partition(".")
            existing = params.get(outer)
            mapping = existing if isinstance(existing, dict) else {}
            mapping[inner] = value
            params[outer] = mapping
        elif value.lower() in {"true", "false"}:
            params[key] = value.lower() == "true"
        else:
            params[key] = value
    return params


def _merge(base: Parameters, overrides: Parameters) -> Parameters:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


console = Console()


@click.command()
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("column")
@click.option(
    "--kind",
    callback=_parse_kind,
    help="Transformation kind, e.g. SplitFirstToken, DateFormat, CategoryMapping",
)
@click.option(
    "--preset",
    type=click.Choice(sorted(presets.PRESETS)),
    help="Start from a ready-made kind and parameter set",
)
@click.option(
    "--param",
    "params",
    multiple=True,
    callback=_parse_params,
    help="Transformation parameter as KEY=VALUE (repeatable)",
)
@click.option("--config", "config_file", type=click.Path(exists=True, path_type=Path))
def preview_command(
    csv_file: Path,
    column: str,
    kind: TransformationKind | None,
    preset: str | None,
    params: Parameters,
    config_file: Path | None,
) -> None:
    """Preview a transformation of COLUMN in CSV_FILE on its sample values.

    Examples:

    \b
        csv-mapper preview patients.csv PhysicianName --kind SplitFirstToken --param "Delimiter=, "

    \b
        csv-mapper preview patients.csv Gender --kind CategoryMapping \\
            --param Mappings.Male=M --param Mappings.Female=F --param DefaultValue=U

    \b
        csv-mapper preview patients.csv Gender --preset gender --param Mappings.Nb=O
    """
    if preset is not None:
        preset_kind, preset_params = presets.resolve(preset)
        if kind is not None and kind is not preset_kind:
            raise click.BadParameter(
                f"Preset {preset!r} uses {preset_kind.value}, not {kind.value}",
                param_hint="--kind",
            )
        kind = preset_kind
        params = _merge(preset_params, params)
    if kind is None:
        raise click.UsageError("Give --kind or --preset")

    config = ConfigLoader.load(config_file=config_file)
    container = DependencyContainer(config=config, console=console)
    library = container.create_transformation_library()
    try:
        columns = container.create_csv_sampler().parse_csv_file(csv_file)
        source = next((c for c in columns if c.name == column), None)
        if source is None:
            raise click.BadParameter(
                f"Column {column!r} not found in {csv_file.name}", param_hint="COLUMN"
            )
        library.ensure_valid(kind, params)
        result = library.preview(source.sample_values, kind, params)
    except MapperError as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title=result.description)
    table.add_column(source.name, style="cyan")
    table.add_column(f"{kind.value} ({result.inferred_type.value})", style="magenta")
    for before, after in zip(source.sample_values, result.values, strict=True):
        table.add_row(before, after)
    console.print(table)
    if not result.success:
        console.print(f"[yellow]{len(result.errors)} value(s) failed to transform[/yellow]")
