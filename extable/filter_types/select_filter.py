from collections.abc import Hashable
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar, Union

from attrs import define, field

from extable.constants import FILTER_TYPE_SELECT
from extable.filter import ExFilter, FilterInfo, PredicateType
from extable.utils import join_words, to_text

S = TypeVar("S", bound="SelectFilter")

OptionsType = Union[Mapping[Any, str], Callable[[], Mapping[Any, str]]]


def resolve_options(options: OptionsType) -> Dict[Any, str]:
    """Evaluate the options if they are provided by a callable."""
    if callable(options):
        options = options()
    return dict(options or {})


@define
class SelectFilter(ExFilter):
    """A filter where the user picks one or more values from a list.

    Attributes:
        options: Maps the values to the labels shown to the user, in the
            order in which they are presented. A callable that returns the
            mapping is evaluated when assigned.
        placeholder: The text of the entry that disables the filter.
        multiple: Whether the user can pick more than one value; the
            filter value is then a list and records whose field is in the
            list are kept.
        searchable: Whether the list of options can be searched.
    """

    type_name: str = field(default=FILTER_TYPE_SELECT, init=False)

    options: Dict[Any, str] = field(factory=dict, converter=resolve_options)
    placeholder: Optional[str] = field(default="-- All --")
    multiple: bool = field(default=False)
    searchable: bool = field(default=False)

    def set_options(self: S, options: OptionsType) -> S:
        self.options = resolve_options(options)
        return self

    def set_placeholder(self: S, placeholder: Optional[str]) -> S:
        self.placeholder = placeholder
        return self

    def set_multiple(self: S, multiple: bool = True) -> S:
        self.multiple = multiple
        return self

    def set_searchable(self: S, searchable: bool = True) -> S:
        self.searchable = searchable
        return self

    def get_predicate(self, value: Any) -> PredicateType:
        if self.multiple and isinstance(value, (list, tuple, set, frozenset)):
            return lambda record: record.get(self.name) in value
        return super().get_predicate(value)

    def option_label(self, value: Any) -> str:
        """The label of an option or the value itself if not an option."""
        if isinstance(value, Hashable) and value in self.options:
            return self.options[value]
        return to_text(value)

    def describe_value(self, value: Any) -> str:
        if isinstance(value, (list, tuple, set, frozenset)):
            return join_words([self.option_label(v) for v in value], "or")
        return self.option_label(value)

    def is_selected(self, option: Any, value: Any) -> bool:
        """Tell if an option is part of the current value.

        Values coming from requests are strings so the comparison is done
        on the string form.
        """
        if isinstance(value, (list, tuple, set, frozenset)):
            return to_text(option) in [to_text(v) for v in value]
        return value is not None and to_text(option) == to_text(value)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["options"] = dict(self.options)
        result["placeholder"] = self.placeholder
        result["multiple"] = self.multiple
        result["searchable"] = self.searchable
        return result


class SelectInfo(FilterInfo):
    """Parser for information about a select filter.

    Attributes:
        options: Maps the values to the labels shown to the user.
        placeholder: The text of the entry that disables the filter.
        multiple: Whether the user can pick more than one value.
        searchable: Whether the list of options can be searched.
    """

    options: Optional[Dict[Any, str]] = None
    placeholder: Optional[str] = None
    multiple: Optional[bool] = None
    searchable: Optional[bool] = None
