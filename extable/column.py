import json
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)

from attrs import define, field
from pydantic import BaseModel, ConfigDict

from extable.constants import COLUMN_TYPE_TEXT, AlignType, RecordType
from extable.utils import humanize, truncate

if TYPE_CHECKING:
    from extable.column_types.api import (  # noqa: F401
        BadgeColumn,
        BooleanColumn,
        DateColumn,
        DateTimeColumn,
        ImageColumn,
        MoneyColumn,
        NumericColumn,
        TextColumn,
    )

C = TypeVar("C", bound="ExColumn")

StateCallback = Callable[[RecordType], Any]
FormatCallback = Callable[[Any, RecordType], Any]


@define
class ExColumn:
    """A column computes the value displayed in one cell of each row.

    The value of a cell is resolved in two steps. `get_state()` locates the
    raw value in the record (or computes it with `state_using`) and
    `transform()` turns it into the value that is displayed. Variants only
    reimplement `transform()`.

    Attributes:
        name: The key of the field in the records. Must not be empty and
            should be unique inside a table.
        label: The header of the column. Defaults to the humanized name.
        type_name: The unique type name of the column.
        tooltip: An optional hint shown next to the header.
        default: The value used when the record has no value for the field.
        sortable: Whether the user can sort the table by this column.
        searchable: Whether the quick search looks at this column.
        visible: Whether the column is displayed.
        toggleable: Whether the user can show/hide the column.
        width: The width of the column as a CSS length (`120px`, `10%`).
        align: Horizontal alignment of the cells.
        class_names: Extra CSS classes for the cells.
        state_using: Callback that receives the record and computes the
            raw value. When set, the record is not consulted.
        format_using: Callback that receives the value and the record and
            returns the value to display.
        prefix: Text placed in front of non-empty values.
        suffix: Text placed after non-empty values.
        limit: Maximum number of characters; longer values are truncated
            and end in `...`.
        copyable: Whether the renderer offers a copy-to-clipboard button.
        html: Whether the value is markup that must not be escaped.
        wrap: Whether long values wrap inside the cell.
    """

    name: str
    label: str = field(default="")
    type_name: str = field(default=COLUMN_TYPE_TEXT, init=False)
    tooltip: Optional[str] = field(default=None)
    default: Any = field(default=None)
    sortable: bool = field(default=False)
    searchable: bool = field(default=False)
    visible: bool = field(default=True)
    toggleable: bool = field(default=False)
    width: Optional[str] = field(default=None)
    align: AlignType = field(default="left")
    class_names: List[str] = field(factory=list)
    state_using: Optional[StateCallback] = field(default=None, repr=False)
    format_using: Optional[FormatCallback] = field(default=None, repr=False)
    prefix: Optional[str] = field(default=None)
    suffix: Optional[str] = field(default=None)
    limit: Optional[int] = field(default=None)
    copyable: bool = field(default=False)
    html: bool = field(default=False)
    wrap: bool = field(default=False)

    def __attrs_post_init__(self):
        if not self.name:
            raise ValueError("Column name must not be empty")
        if not self.label:
            self.label = humanize(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    @classmethod
    def make(cls: Type[C], name: str, **kwargs: Any) -> C:
        """Create a column of this class."""
        return cls(name=name, **kwargs)

    # Factory entry points for the variants.

    @staticmethod
    def text(name: str) -> "TextColumn":
        from extable.column_types.text_column import TextColumn

        return TextColumn(name=name)

    @staticmethod
    def numeric(name: str) -> "NumericColumn":
        from extable.column_types.numeric_column import NumericColumn

        return NumericColumn(name=name)

    @staticmethod
    def money(name: str) -> "MoneyColumn":
        from extable.column_types.money_column import MoneyColumn

        return MoneyColumn(name=name)

    @staticmethod
    def date(name: str) -> "DateColumn":
        from extable.column_types.date_column import DateColumn

        return DateColumn(name=name)

    @staticmethod
    def date_time(name: str) -> "DateTimeColumn":
        from extable.column_types.date_time import DateTimeColumn

        return DateTimeColumn(name=name)

    @staticmethod
    def boolean(name: str) -> "BooleanColumn":
        from extable.column_types.boolean_column import BooleanColumn

        return BooleanColumn(name=name)

    @staticmethod
    def badge(name: str) -> "BadgeColumn":
        from extable.column_types.badge_column import BadgeColumn

        return BadgeColumn(name=name)

    @staticmethod
    def image(name: str) -> "ImageColumn":
        from extable.column_types.image_column import ImageColumn

        return ImageColumn(name=name)

    # Fluent configuration.

    def set_label(self: C, label: Union[str, Callable[[], str]]) -> C:
        self.label = label() if callable(label) else label
        return self

    def set_tooltip(self: C, tooltip: Optional[str]) -> C:
        self.tooltip = tooltip
        return self

    def set_default(self: C, value: Any) -> C:
        self.default = value
        return self

    def state(self: C, callback: Optional[StateCallback]) -> C:
        """Compute the raw value of the cell from the whole record."""
        self.state_using = callback
        return self

    def format_state_using(self: C, callback: Optional[FormatCallback]) -> C:
        """Format the value using a callback that receives (value, record)."""
        self.format_using = callback
        return self

    def set_prefix(self: C, prefix: Optional[str]) -> C:
        self.prefix = prefix
        return self

    def set_suffix(self: C, suffix: Optional[str]) -> C:
        self.suffix = suffix
        return self

    def set_limit(self: C, length: Optional[int]) -> C:
        self.limit = length
        return self

    def set_html(self: C, html: bool = True) -> C:
        self.html = html
        return self

    def set_copyable(self: C, copyable: bool = True) -> C:
        self.copyable = copyable
        return self

    def set_wrap(self: C, wrap: bool = True) -> C:
        self.wrap = wrap
        return self

    def set_sortable(self: C, sortable: bool = True) -> C:
        self.sortable = sortable
        return self

    def set_searchable(self: C, searchable: bool = True) -> C:
        self.searchable = searchable
        return self

    def set_visible(self: C, visible: bool = True) -> C:
        self.visible = visible
        return self

    def hide(self: C, hidden: bool = True) -> C:
        self.visible = not hidden
        return self

    def set_toggleable(self: C, toggleable: bool = True) -> C:
        self.toggleable = toggleable
        return self

    def set_width(self: C, width: Optional[str]) -> C:
        self.width = width
        return self

    def align_left(self: C) -> C:
        self.align = "left"
        return self

    def align_center(self: C) -> C:
        self.align = "center"
        return self

    def align_right(self: C) -> C:
        self.align = "right"
        return self

    def set_class(self: C, classes: Union[str, List[str]]) -> C:
        self.class_names = (
            [classes] if isinstance(classes, str) else list(classes)
        )
        return self

    # Value resolution.

    def get_state(self, record: RecordType) -> Any:
        """Locate the raw value of the cell.

        Args:
            record: The record being displayed.

        Returns:
            The result of `state_using` if set, otherwise the value of the
            field in the record or the `default` if the record has none.
        """
        if self.state_using is not None:
            return self.state_using(record)
        value = record.get(self.name)
        return self.default if value is None else value

    def get_value(self, record: RecordType) -> Any:
        """Compute the value displayed in the cell for a record."""
        return self.transform(self.get_state(record), record)

    def transform(self, value: Any, record: RecordType) -> Any:
        """Turn the raw value into the displayed value.

        Variants reimplement this method. The generic behavior applies
        `format_using` and then decorates the result.
        """
        if self.format_using is not None:
            value = self.format_using(value, record)
        return self.decorate(value)

    def decorate(self, value: Any) -> Any:
        """Apply the prefix, the suffix and the length limit.

        Empty values are returned unchanged.
        """
        if value is None or value == "":
            return value
        if self.prefix:
            value = f"{self.prefix}{value}"
        if self.suffix:
            value = f"{value}{self.suffix}"
        if self.limit and isinstance(value, str):
            value = truncate(value, self.limit)
        return value

    # Serialization.

    def to_dict(self) -> Dict[str, Any]:
        """Structural snapshot of the column."""
        return {
            "name": self.name,
            "type": self.type_name,
            "label": self.label,
            "tooltip": self.tooltip,
            "default": self.default,
            "sortable": self.sortable,
            "searchable": self.searchable,
            "visible": self.visible,
            "toggleable": self.toggleable,
            "width": self.width,
            "align": self.align,
            "class": list(self.class_names),
            "html": self.html,
            "copyable": self.copyable,
            "wrap": self.wrap,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class ColumnInfo(BaseModel):
    """Parser for information about a column.

    Declarative table definitions use this mechanism to validate the
    settings of a column before the column is created. The attributes have
    exactly the same names as those in the `ExColumn` class.

    Attributes:
        label: The header of the column.
        tooltip: An optional hint shown next to the header.
        default: The value used when the record has no value for the field.
        sortable: Whether the user can sort the table by this column.
        searchable: Whether the quick search looks at this column.
        visible: Whether the column is displayed.
        toggleable: Whether the user can show/hide the column.
        width: The width of the column as a CSS length.
        align: Horizontal alignment of the cells.
        class_names: Extra CSS classes for the cells.
        prefix: Text placed in front of non-empty values.
        suffix: Text placed after non-empty values.
        limit: Maximum number of characters.
        copyable: Whether the renderer offers a copy button.
        html: Whether the value is markup that must not be escaped.
        wrap: Whether long values wrap inside the cell.
    """

    model_config = ConfigDict(extra="forbid")

    label: Optional[str] = None
    tooltip: Optional[str] = None
    default: Any = None
    sortable: Optional[bool] = None
    searchable: Optional[bool] = None
    visible: Optional[bool] = None
    toggleable: Optional[bool] = None
    width: Optional[str] = None
    align: Optional[AlignType] = None
    class_names: Optional[List[str]] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    limit: Optional[int] = None
    copyable: Optional[bool] = None
    html: Optional[bool] = None
    wrap: Optional[bool] = None
