"""Filter support.

A filter narrows a sequence of records given a value chosen by the user.
The value usually comes from a request parameter (see `input_name`), so
`None`, empty strings and empty lists mean that the filter is not active.

Each variant provides a single strategy function, `get_predicate()`, that
turns the filter value into a test for one record. A `query_using`
callback replaces that test entirely:

```python
ExFilter.make("in_stock").query(lambda record, value: record["qty"] > 0)
```
"""

import json
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from attrs import define, field
from pydantic import BaseModel, ConfigDict

from extable.constants import FILTER_TYPE_TEXT, RecordType
from extable.utils import humanize, join_words, to_text

if TYPE_CHECKING:
    from extable.filter_types.date_filter import DateFilter  # noqa: F401
    from extable.filter_types.select_filter import SelectFilter  # noqa: F401

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="ExFilter")

PredicateType = Callable[[RecordType], bool]
QueryCallback = Callable[[RecordType, Any], bool]
IndicatorCallback = Callable[[Any], Optional[str]]


def is_empty_filter_value(value: Any) -> bool:
    """Tell if a filter value means that the filter is not active."""
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    if isinstance(value, Mapping):
        return all(is_empty_filter_value(v) for v in value.values())
    return False


@define
class ExFilter:
    """A filter that keeps the records where the field equals the value.

    Attributes:
        name: The key of the field in the records; also identifies the
            filter inside a table.
        label: The text shown to the user. Defaults to the humanized name.
        type_name: The unique type name of the filter.
        default: The value of the filter when the user did not choose one.
        query_using: Callback that receives the record and the filter value
            and decides if the record is kept. Exceptions raised by it are
            not caught.
        indicate_using: Callback that receives the filter value and returns
            the text of the active-filter indicator.
        visible: Whether the filter is shown to the user.
        query_param: The name of the request parameter that carries the
            value. Defaults to `filter[<name>]`.
    """

    name: str
    label: str = field(default="")
    type_name: str = field(default=FILTER_TYPE_TEXT, init=False)
    default: Any = field(default=None)
    query_using: Optional[QueryCallback] = field(default=None, repr=False)
    indicate_using: Optional[IndicatorCallback] = field(
        default=None, repr=False
    )
    visible: bool = field(default=True)
    query_param: Optional[str] = field(default=None)

    def __attrs_post_init__(self):
        if not self.name:
            raise ValueError("Filter name must not be empty")
        if not self.label:
            self.label = humanize(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    @classmethod
    def make(cls: Type[F], name: str, **kwargs: Any) -> F:
        """Create a filter of this class."""
        return cls(name=name, **kwargs)

    @staticmethod
    def select(name: str) -> "SelectFilter":
        from extable.filter_types.select_filter import SelectFilter

        return SelectFilter(name=name)

    @staticmethod
    def date(name: str) -> "DateFilter":
        from extable.filter_types.date_filter import DateFilter

        return DateFilter(name=name)

    def set_label(self: F, label: str) -> F:
        self.label = label
        return self

    def set_default(self: F, value: Any) -> F:
        self.default = value
        return self

    def query(self: F, callback: Optional[QueryCallback]) -> F:
        """Decide which records are kept using a callback."""
        self.query_using = callback
        return self

    def set_indicate_using(self: F, callback: Optional[IndicatorCallback]) -> F:
        self.indicate_using = callback
        return self

    def set_visible(self: F, visible: bool = True) -> F:
        self.visible = visible
        return self

    def set_query_param(self: F, param: Optional[str]) -> F:
        self.query_param = param
        return self

    @property
    def input_name(self) -> str:
        """The name of the request parameter that carries the value."""
        return self.query_param or f"filter[{self.name}]"

    def get_predicate(self, value: Any) -> PredicateType:
        """Create the test applied to each record for a (non-empty) value."""
        return lambda record: record.get(self.name) == value

    def apply(
        self, records: Sequence[RecordType], value: Any
    ) -> Sequence[RecordType]:
        """Keep the records that pass the filter.

        The order of the records is preserved and the records themselves
        are not changed.

        Args:
            records: The records to filter.
            value: The value of the filter.

        Returns:
            The input itself if the value is empty, a new list with the
            records that passed otherwise.
        """
        if is_empty_filter_value(value):
            return records

        if self.query_using is not None:
            query_using = self.query_using

            def predicate(record: RecordType) -> bool:
                return bool(query_using(record, value))

        else:
            predicate = self.get_predicate(value)

        result = [record for record in records if predicate(record)]
        logger.debug(
            "Filter %s kept %d of %d records",
            self.name,
            len(result),
            len(records),
        )
        return result

    def describe_value(self, value: Any) -> str:
        """Human readable form of a filter value."""
        if isinstance(value, (list, tuple, set, frozenset)):
            return join_words(value)
        return to_text(value)

    def get_indicator(self, value: Any) -> Optional[str]:
        """Compute the text of the active-filter indicator.

        Returns:
            None if the value is empty, the result of `indicate_using` if set
            and `Label: value` otherwise.
        """
        if is_empty_filter_value(value):
            return None
        if self.indicate_using is not None:
            return self.indicate_using(value)
        return f"{self.label}: {self.describe_value(value)}"

    def to_dict(self) -> Dict[str, Any]:
        """Structural snapshot of the filter."""
        return {
            "name": self.name,
            "type": self.type_name,
            "label": self.label,
            "default": self.default,
            "visible": self.visible,
            "queryParam": self.query_param,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class FilterInfo(BaseModel):
    """Parser for information about a filter.

    The attributes have exactly the same names as those in the `ExFilter`
    class.

    Attributes:
        label: The text shown to the user.
        default: The value of the filter when the user did not choose one.
        visible: Whether the filter is shown to the user.
        query_param: The name of the request parameter that carries the
            value.
    """

    model_config = ConfigDict(extra="forbid")

    label: Optional[str] = None
    default: Any = None
    visible: Optional[bool] = None
    query_param: Optional[str] = None
