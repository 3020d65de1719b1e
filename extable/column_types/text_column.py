from attrs import define, field

from extable.column import ColumnInfo, ExColumn
from extable.constants import COLUMN_TYPE_TEXT


@define
class TextColumn(ExColumn):
    """A column that shows plain text.

    The value is displayed as it is found in the record, decorated with the
    prefix, the suffix and the length limit.
    """

    type_name: str = field(default=COLUMN_TYPE_TEXT, init=False)


class TextInfo(ColumnInfo):
    """Parser for information about a text column."""
