from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.columns import CsvColumn
    from ...domain.services.mapping.validator import ValidationReport


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_csv_loaded(
        self, csv_type: str, path: Path, columns: list[CsvColumn]
    ) -> None:
        return None

    @override
    def log_schema_loaded(
        self, path: Path, database_name: str, table_count: int
    ) -> None:
        return None

    @override
    def log_auto_match(self, csv_type: str, matched: int, total: int) -> None:
        return None

    @override
    def log_validation(self, csv_type: str, report: ValidationReport) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
