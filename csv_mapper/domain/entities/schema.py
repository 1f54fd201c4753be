from pydantic import BaseModel, ConfigDict, Field

from ..services.type_inference import TypeTag


class _SchemaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class DatabaseColumn(_SchemaModel):
    name: str
    data_type: str = Field(default=TypeTag.STRING.value, alias="dataType")
    is_required: bool = Field(default=False, alias="isRequired")
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    can_transform: bool | None = Field(default=None, alias="canTransform")

    @property
    def normalized_type(self) -> str:
        return self.data_type.strip().lower()


class SchemaTable(_SchemaModel):
    table_name: str = Field(alias="tableName")
    csv_type: str = Field(default="", alias="csvType")
    columns: tuple[DatabaseColumn, ...] = ()

    def get_column(self, name: str) -> DatabaseColumn | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @property
    def required_columns(self) -> list[DatabaseColumn]:
        return [column for column in self.columns if column.is_required]


class DatabaseSchema(_SchemaModel):
    database_name: str = Field(default="", alias="databaseName")
    tables: tuple[SchemaTable, ...] = ()

    @property
    def csv_types(self) -> list[str]:
        seen: list[str] = []
        for table in self.tables:
            if table.csv_type and table.csv_type not in seen:
                seen.append(table.csv_type)
        return seen

    def table_for_csv_type(self, csv_type: str) -> SchemaTable | None:
        for table in self.tables:
            if table.csv_type == csv_type:
                return table
        return None

    def get_table(self, table_name: str) -> SchemaTable | None:
        for table in self.tables:
            if table.table_name == table_name:
                return table
        return None
