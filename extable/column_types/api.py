from extable.column import ColumnInfo, ExColumn  # noqa: F401
from extable.column_types.badge_column import (  # noqa: F401
    BadgeColumn,
    BadgeInfo,
)
from extable.column_types.boolean_column import (  # noqa: F401
    BooleanColumn,
    BooleanInfo,
)
from extable.column_types.date_column import DateColumn, DateInfo  # noqa: F401
from extable.column_types.date_time import (  # noqa: F401
    DateTimeColumn,
    DateTimeInfo,
)
from extable.column_types.image_column import (  # noqa: F401
    ImageColumn,
    ImageInfo,
)
from extable.column_types.money_column import (  # noqa: F401
    MoneyColumn,
    MoneyInfo,
)
from extable.column_types.numeric_column import (  # noqa: F401
    NumericColumn,
    NumericInfo,
)
from extable.column_types.text_column import TextColumn, TextInfo  # noqa: F401
from extable.constants import (
    COLUMN_TYPE_BADGE,
    COLUMN_TYPE_BOOLEAN,
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_DT,
    COLUMN_TYPE_IMAGE,
    COLUMN_TYPE_MONEY,
    COLUMN_TYPE_NUMERIC,
    COLUMN_TYPE_TEXT,
)

column_type_to_class = {
    COLUMN_TYPE_BADGE: BadgeColumn,
    COLUMN_TYPE_BOOLEAN: BooleanColumn,
    COLUMN_TYPE_DATE: DateColumn,
    COLUMN_TYPE_DT: DateTimeColumn,
    COLUMN_TYPE_IMAGE: ImageColumn,
    COLUMN_TYPE_MONEY: MoneyColumn,
    COLUMN_TYPE_NUMERIC: NumericColumn,
    COLUMN_TYPE_TEXT: TextColumn,
}

column_type_to_info = {
    COLUMN_TYPE_BADGE: BadgeInfo,
    COLUMN_TYPE_BOOLEAN: BooleanInfo,
    COLUMN_TYPE_DATE: DateInfo,
    COLUMN_TYPE_DT: DateTimeInfo,
    COLUMN_TYPE_IMAGE: ImageInfo,
    COLUMN_TYPE_MONEY: MoneyInfo,
    COLUMN_TYPE_NUMERIC: NumericInfo,
    COLUMN_TYPE_TEXT: TextInfo,
}
