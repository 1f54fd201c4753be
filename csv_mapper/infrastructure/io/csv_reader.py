from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...constants import Defaults
from ...domain.entities.columns import CsvColumn
from .exceptions import DataParseError, DataSourceNotFoundError, EmptyInputError

if TYPE_CHECKING:
    from pathlib import Path


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line on commas, honouring double-quoted fields.

    Quotes toggle the quoted state and are dropped. Doubled quotes are not
    treated as an escape. Fields are returned unstripped.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


@dataclass(slots=True)
class CsvSampler:
    """Read a CSV header and the first few rows as column samples."""

    sample_rows: int = Defaults.SAMPLE_ROWS
    encoding: str = Defaults.CSV_ENCODING

    def parse_csv_file(self, path: Path) -> list[CsvColumn]:
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        try:
            with path.open("r", encoding=self.encoding, newline="") as handle:
                header = handle.readline().rstrip("\r\n")
                if not header.strip():
                    raise EmptyInputError(f"CSV file is empty or has no headers: {path}")
                names = [name.strip() for name in split_csv_line(header)]
                samples: list[list[str]] = [[] for _ in names]

                rows = 0
                for raw in handle:
                    if rows >= self.sample_rows:
                        break
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    values = split_csv_line(line)
                    # Short rows only feed the leading columns; extra fields are ignored.
                    for index, value in enumerate(values[: len(names)]):
                        samples[index].append(value.strip())
                    rows += 1
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path}. Try a different encoding: {e}"
            ) from e
        except OSError as e:
            raise DataParseError(f"Error parsing CSV file {path}: {e}") from e

        return [
            CsvColumn.from_samples(name, index, samples[index])
            for index, name in enumerate(names)
        ]
