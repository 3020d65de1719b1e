from extable.constants import (
    FILTER_TYPE_DATE,
    FILTER_TYPE_SELECT,
    FILTER_TYPE_TEXT,
)
from extable.filter import ExFilter, FilterInfo  # noqa: F401
from extable.filter_types.date_filter import (  # noqa: F401
    DateFilter,
    DateFilterInfo,
)
from extable.filter_types.select_filter import (  # noqa: F401
    SelectFilter,
    SelectInfo,
)

filter_type_to_class = {
    FILTER_TYPE_DATE: DateFilter,
    FILTER_TYPE_SELECT: SelectFilter,
    FILTER_TYPE_TEXT: ExFilter,
}

filter_type_to_info = {
    FILTER_TYPE_DATE: DateFilterInfo,
    FILTER_TYPE_SELECT: SelectInfo,
    FILTER_TYPE_TEXT: FilterInfo,
}
