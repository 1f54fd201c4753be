from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.columns import CsvColumn
    from ...domain.services.mapping.validator import ValidationReport


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    csv_type: str = ""
    file_name: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "files_loaded": 0,
        "columns_sampled": 0,
        "validations": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_csv_loaded(
        self, csv_type: str, path: Path, columns: list[CsvColumn]
    ) -> None:
        self.set_context(csv_type=csv_type, file_name=path.name)
        self._stats["files_loaded"] += 1
        self._stats["columns_sampled"] += len(columns)
        rows = max((len(column.sample_values) for column in columns), default=0)
        self.verbose(
            f"Loaded {len(columns)} columns ({rows} sample rows) from {path.name}"
        )
        if self.verbosity >= LogLevel.DEBUG:
            for column in columns:
                self.debug(f"  {column.name}: {column.inferred_type}")

    @override
    def log_schema_loaded(
        self, path: Path, database_name: str, table_count: int
    ) -> None:
        self._stats["files_loaded"] += 1
        label = database_name or path.stem
        self.verbose(f"Loaded schema {label} with {table_count} table(s)")

    @override
    def log_auto_match(self, csv_type: str, matched: int, total: int) -> None:
        self.set_context(csv_type=csv_type)
        self.verbose(f"Auto-matched {matched} of {total} database columns")

    @override
    def log_validation(self, csv_type: str, report: ValidationReport) -> None:
        self.set_context(csv_type=csv_type)
        self._stats["validations"] += 1
        for column, message in report.warnings.items():
            self.warning(f"{column}: {message}")
        for column, message in report.errors.items():
            self.error(f"{column}: {message}")
        if report.is_valid:
            self.success(f"Mappings for {csv_type} are valid")

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Session Statistics:[/dim]")
            self.console.print(f"[dim]  Files loaded: {self._stats['files_loaded']}[/dim]")
            self.console.print(
                f"[dim]  Columns sampled: {self._stats['columns_sampled']}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        return f"[{self._context.csv_type}] " if self._context.csv_type else ""
