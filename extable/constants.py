# Constants for column types
from typing import Any, Literal, Mapping

COLUMN_TYPE_TEXT = "text"
COLUMN_TYPE_NUMERIC = "numeric"
COLUMN_TYPE_MONEY = "money"
COLUMN_TYPE_DATE = "date"
COLUMN_TYPE_DT = "datetime"
COLUMN_TYPE_BOOLEAN = "boolean"
COLUMN_TYPE_BADGE = "badge"
COLUMN_TYPE_IMAGE = "image"

# Constants for filter types
FILTER_TYPE_TEXT = "text"
FILTER_TYPE_SELECT = "select"
FILTER_TYPE_DATE = "date"

SORT_ASC = "asc"
SORT_DESC = "desc"

# Appended to values that are cut short by a column's `limit`.
TRUNCATION_MARKER = "..."

# Shown in place of values that have no meaningful representation.
EMPTY_PLACEHOLDER = "-"

AlignType = Literal["left", "center", "right"]
SortDirType = Literal["asc", "desc"]

# A record is a read-only mapping from field names to values.
RecordType = Mapping[str, Any]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "RWF": "FRw",
    "KES": "KSh",
    "TZS": "TSh",
    "UGX": "USh",
}

BADGE_COLOR_CLASSES = {
    "gray": "bg-gray-100 text-gray-800",
    "red": "bg-red-100 text-red-800",
    "orange": "bg-orange-100 text-orange-800",
    "yellow": "bg-yellow-100 text-yellow-800",
    "green": "bg-green-100 text-green-800",
    "blue": "bg-blue-100 text-blue-800",
    "indigo": "bg-indigo-100 text-indigo-800",
    "purple": "bg-purple-100 text-purple-800",
    "pink": "bg-pink-100 text-pink-800",
}
DEFAULT_BADGE_COLOR = "gray"
