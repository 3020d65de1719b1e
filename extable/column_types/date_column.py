import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TypeVar
from zoneinfo import ZoneInfo

from attrs import define, field

from extable.column import ColumnInfo, ExColumn
from extable.constants import COLUMN_TYPE_DATE, EMPTY_PLACEHOLDER, RecordType
from extable.utils import parse_date_time, to_text

logger = logging.getLogger(__name__)

D = TypeVar("D", bound="DateColumn")


@define
class DateColumn(ExColumn):
    """A column that shows dates.

    Values can be `date` or `datetime` instances, ISO-8601 strings, some
    common textual formats or UNIX timestamps. A value that cannot be
    interpreted is shown as it is, so a bad value never breaks the row.

    Attributes:
        format: The `strftime()` pattern used to display the value.
        timezone: The IANA name of the time zone the value is converted to
            before formatting. Naive values are considered to be in UTC.
    """

    type_name: str = field(default=COLUMN_TYPE_DATE, init=False)

    format: str = field(default="%b %d, %Y")
    timezone: Optional[str] = field(default=None)

    def set_format(self: D, fmt: str) -> D:
        self.format = fmt
        return self

    def set_timezone(self: D, tz_name: Optional[str]) -> D:
        self.timezone = tz_name
        return self

    def format_moment(self, value: Any) -> str:
        """Format the value, falling back to its string representation.

        Args:
            value: The raw value.

        Returns:
            The formatted date or `str(value)` if the value could not be
            interpreted or the time zone is not known.
        """
        try:
            moment = parse_date_time(value)
            if self.timezone and isinstance(moment, datetime):
                if moment.tzinfo is None:
                    moment = moment.replace(tzinfo=timezone.utc)
                moment = moment.astimezone(ZoneInfo(self.timezone))
            return moment.strftime(self.format)
        except Exception as exc:
            logger.debug(
                "Column %s displays %r as is: %s", self.name, value, exc
            )
            return to_text(value)

    def transform(self, value: Any, record: RecordType) -> Any:
        if value is None or value == "":
            return EMPTY_PLACEHOLDER if self.default is None else self.default

        formatted = self.format_moment(value)
        if self.format_using is not None:
            formatted = self.format_using(formatted, record)
        return formatted

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["format"] = self.format
        result["timezone"] = self.timezone
        return result


class DateInfo(ColumnInfo):
    """Parser for information about a date column.

    Attributes:
        format: The `strftime()` pattern used to display the value.
        timezone: The IANA name of the time zone.
    """

    format: Optional[str] = None
    timezone: Optional[str] = None
