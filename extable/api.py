from extable.action import (  # noqa: F401
    ActionInfo,
    ActionState,
    BulkAction,
    BulkActionInfo,
    ExAction,
)
from extable.column import ColumnInfo, ExColumn  # noqa: F401
from extable.column_types.api import (  # noqa: F401
    BadgeColumn,
    BadgeInfo,
    BooleanColumn,
    BooleanInfo,
    DateColumn,
    DateInfo,
    DateTimeColumn,
    DateTimeInfo,
    ImageColumn,
    ImageInfo,
    MoneyColumn,
    MoneyInfo,
    NumericColumn,
    NumericInfo,
    TextColumn,
    TextInfo,
    column_type_to_class,
    column_type_to_info,
)
from extable.filter import ExFilter, FilterInfo  # noqa: F401
from extable.filter_types.api import (  # noqa: F401
    DateFilter,
    DateFilterInfo,
    SelectFilter,
    SelectInfo,
    filter_type_to_class,
    filter_type_to_info,
)
from extable.loader import (  # noqa: F401
    load_definition,
    load_records,
    table_from_dict,
)
from extable.renderer import ExRenderer, HtmlRenderer  # noqa: F401
from extable.schema import SchemaField, columns_from_schema  # noqa: F401
from extable.table import ExTable  # noqa: F401
