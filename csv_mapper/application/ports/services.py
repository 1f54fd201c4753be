from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.columns import CsvColumn
    from ...domain.services.mapping.validator import ValidationReport


@runtime_checkable
class CsvSourcePort(Protocol):
    pass

    def parse_csv_file(self, path: Path) -> list[CsvColumn]: ...


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_csv_loaded(
        self, csv_type: str, path: Path, columns: list[CsvColumn]
    ) -> None: ...

    def log_schema_loaded(
        self, path: Path, database_name: str, table_count: int
    ) -> None: ...

    def log_auto_match(
        self, csv_type: str, matched: int, total: int
    ) -> None: ...

    def log_validation(self, csv_type: str, report: ValidationReport) -> None: ...

    def log_final_stats(self) -> None: ...
