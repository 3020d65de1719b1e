from attrs import define, field

from extable.column_types.date_column import DateColumn, DateInfo
from extable.constants import COLUMN_TYPE_DT


@define
class DateTimeColumn(DateColumn):
    """A column that shows the date and the time of day."""

    type_name: str = field(default=COLUMN_TYPE_DT, init=False)

    format: str = field(default="%b %d, %Y %H:%M")


class DateTimeInfo(DateInfo):
    """Parser for information about a date-time column."""
