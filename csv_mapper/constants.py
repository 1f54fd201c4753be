from typing import ClassVar


class Defaults:
    SAMPLE_ROWS = 5
    MAX_STRING_LENGTH = 4000
    DATE_FORMAT = "yyyy-MM-dd"
    DELIMITER = " "
    CATEGORY_DEFAULT_VALUE = "U"
    MAPPING_FILE = "mappings.json"
    CSV_ENCODING = "utf-8-sig"
    SUGGESTION_MIN_SCORE = 0.6
    SUGGESTION_LIMIT = 3


class Sentinels:
    NO_MAPPING = "-- No Mapping (Optional) --"
    PREVIEW_ERROR_PREFIX = "#ERROR: "


class NameHints:
    """Substrings used by the name-based heuristics.

    ``DUPLICATE_TOLERANT`` is matched case-insensitively against CSV column
    names by the validator. The other groups are matched case-sensitively
    against database column names by the transformability rules.
    """

    DUPLICATE_TOLERANT: ClassVar[tuple[str, ...]] = ("name", "date", "dob", "birth")
    NAME_LIKE: ClassVar[tuple[str, ...]] = ("Name", "Identifier")
    CATEGORY_LIKE: ClassVar[tuple[str, ...]] = ("Gender", "Status", "Type", "Category")
    DERIVED_NUMERIC: ClassVar[tuple[str, ...]] = ("Year", "Age")
    ADDRESS_LIKE: ClassVar[tuple[str, ...]] = (
        "Address",
        "Street",
        "City",
        "State",
        "Zip",
        "PostalCode",
    )
    SPLITTABLE_NAME: ClassVar[tuple[str, ...]] = ("FirstName", "LastName")
    CATEGORY_TARGET: ClassVar[tuple[str, ...]] = ("Gender", "Code")
