import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional, TypeVar, Union

from attrs import define, field

from extable.constants import FILTER_TYPE_DATE
from extable.filter import ExFilter, FilterInfo, PredicateType
from extable.utils import to_date, to_text

logger = logging.getLogger(__name__)

D = TypeVar("D", bound="DateFilter")

DateLike = Union[str, date]


@define
class DateFilter(ExFilter):
    """A filter on the date component of a field.

    For a single date the records on that day are kept. In range mode the
    value is a mapping with optional `from` and `to` keys and the records
    between the two dates (inclusive) are kept. Time of day is ignored in
    both modes. Records whose field cannot be interpreted as a date are
    excluded.

    Attributes:
        range: Whether the filter expects a `{"from": ..., "to": ...}` value.
        min_date: The earliest date the user can choose.
        max_date: The latest date the user can choose.
        format: The `strftime()` pattern of the dates in the user
            interface.
    """

    type_name: str = field(default=FILTER_TYPE_DATE, init=False)

    range: bool = field(default=False)
    min_date: Optional[DateLike] = field(default=None)
    max_date: Optional[DateLike] = field(default=None)
    format: str = field(default="%Y-%m-%d")

    def set_range(self: D, range: bool = True) -> D:
        self.range = range
        return self

    def set_min_date(self: D, value: Optional[DateLike]) -> D:
        self.min_date = value
        return self

    def set_max_date(self: D, value: Optional[DateLike]) -> D:
        self.max_date = value
        return self

    def set_format(self: D, fmt: str) -> D:
        self.format = fmt
        return self

    def record_date(self, record: Any) -> Optional[date]:
        """The date component of the field or None if not available."""
        value = record.get(self.name)
        if not value:
            return None
        try:
            return to_date(value)
        except ValueError:
            return None

    def bound(self, value: Any) -> Optional[date]:
        """Normalize one end of a range; bad values are ignored."""
        if value is None or value == "":
            return None
        try:
            return to_date(value)
        except ValueError:
            logger.warning(
                "Filter %s ignores the bound %r as it is not a date",
                self.name,
                value,
            )
            return None

    def get_predicate(self, value: Any) -> PredicateType:
        if self.range and isinstance(value, Mapping):
            start = self.bound(value.get("from"))
            end = self.bound(value.get("to"))

            def in_range(record: Any) -> bool:
                crt = self.record_date(record)
                if crt is None:
                    return False
                if start is not None and crt < start:
                    return False
                if end is not None and crt > end:
                    return False
                return True

            return in_range

        try:
            target = to_date(value)
        except ValueError:
            logger.warning(
                "Filter %s received %r which is not a date", self.name, value
            )
            return lambda record: False

        return lambda record: self.record_date(record) == target

    def format_date(self, value: Any) -> str:
        try:
            return to_date(value).strftime(self.format)
        except ValueError:
            return to_text(value)

    def describe_value(self, value: Any) -> str:
        if not isinstance(value, Mapping):
            return self.format_date(value)

        start = value.get("from")
        end = value.get("to")
        if start and end:
            return f"{self.format_date(start)} to {self.format_date(end)}"
        if start:
            return f"from {self.format_date(start)}"
        if end:
            return f"until {self.format_date(end)}"
        return ""

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["range"] = self.range
        result["minDate"] = self.min_date
        result["maxDate"] = self.max_date
        result["format"] = self.format
        return result


class DateFilterInfo(FilterInfo):
    """Parser for information about a date filter.

    Attributes:
        range: Whether the filter expects a range.
        min_date: The earliest date the user can choose.
        max_date: The latest date the user can choose.
        format: The `strftime()` pattern of the dates.
    """

    range: Optional[bool] = None
    min_date: Optional[DateLike] = None
    max_date: Optional[DateLike] = None
    format: Optional[str] = None
