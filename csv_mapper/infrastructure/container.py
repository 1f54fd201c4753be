from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.mapping_session import MappingSession
from ..config import MapperConfig
from ..domain.services.mapping.engine import MappingEngine
from ..transformations.registry import TransformationLibrary
from .io.csv_reader import CsvSampler
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger

if TYPE_CHECKING:
    from ..application.ports.services import CsvSourcePort, LoggerPort


class DependencyContainer:
    pass

    def __init__(
        self,
        config: MapperConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or MapperConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None
        self._csv_sampler_instance: CsvSourcePort | None = None
        self._transformation_library_instance: TransformationLibrary | None = None
        self._mapping_engine_instance: MappingEngine | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_sampler(self) -> CsvSourcePort:
        if self._csv_sampler_instance is None:
            self._csv_sampler_instance = CsvSampler(
                sample_rows=self.config.sample_rows, encoding=self.config.csv_encoding
            )
        return self._csv_sampler_instance

    def create_transformation_library(self) -> TransformationLibrary:
        if self._transformation_library_instance is None:
            self._transformation_library_instance = TransformationLibrary(
                default_date_format=self.config.default_date_format
            )
        return self._transformation_library_instance

    def create_mapping_engine(self) -> MappingEngine:
        if self._mapping_engine_instance is None:
            self._mapping_engine_instance = MappingEngine(
                self.create_transformation_library(),
                min_score=self.config.suggestion_min_score,
                default_max_length=self.config.default_max_length,
            )
        return self._mapping_engine_instance

    def create_mapping_session(self) -> MappingSession:
        return MappingSession(
            engine=self.create_mapping_engine(),
            sampler=self.create_csv_sampler(),
            logger=self.create_logger(),
            config=self.config,
        )
