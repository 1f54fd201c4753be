"""Options shared by several commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import click

F = TypeVar("F", bound=Callable[..., object])


def config_option(func: F) -> F:
    return click.option(
        "--config",
        "config_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Path to a csv_mapper.toml config file (default: ./csv_mapper.toml)",
    )(func)


def verbose_option(func: F) -> F:
    return click.option(
        "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
    )(func)
