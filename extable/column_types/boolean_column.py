from typing import Any, Dict, Optional, Tuple, TypeVar

from attrs import define, field
from markupsafe import Markup

from extable.column import ColumnInfo, ExColumn
from extable.constants import COLUMN_TYPE_BOOLEAN, AlignType, RecordType
from extable.utils import to_bool

B = TypeVar("B", bound="BooleanColumn")


@define
class BooleanColumn(ExColumn):
    """A column that shows an icon for true values and another for false.

    Missing values are false. The value is coerced with `to_bool()` so
    strings like `yes` or `on` also count as true.

    Attributes:
        true_icon: The icon class used for true values.
        false_icon: The icon class used for false values.
        true_color: The color class used for true values.
        false_color: The color class used for false values.
        true_label: Optional text shown next to the icon for true values.
        false_label: Optional text shown next to the icon for false values.
    """

    type_name: str = field(default=COLUMN_TYPE_BOOLEAN, init=False)
    align: AlignType = field(default="center")
    html: bool = field(default=True)

    true_icon: str = field(default="fas fa-check")
    false_icon: str = field(default="fas fa-times")
    true_color: str = field(default="text-green-500")
    false_color: str = field(default="text-red-500")
    true_label: Optional[str] = field(default=None)
    false_label: Optional[str] = field(default=None)

    def set_true_icon(self: B, icon: str) -> B:
        self.true_icon = icon
        return self

    def set_false_icon(self: B, icon: str) -> B:
        self.false_icon = icon
        return self

    def set_true_color(self: B, color: str) -> B:
        self.true_color = color
        return self

    def set_false_color(self: B, color: str) -> B:
        self.false_color = color
        return self

    def set_true_label(self: B, label: Optional[str]) -> B:
        self.true_label = label
        return self

    def set_false_label(self: B, label: Optional[str]) -> B:
        self.false_label = label
        return self

    def choose(self, value: Any) -> Tuple[str, str, Optional[str]]:
        """Select the (icon, color, label) triplet for a value."""
        if to_bool(value):
            return self.true_icon, self.true_color, self.true_label
        return self.false_icon, self.false_color, self.false_label

    def get_state(self, record: RecordType) -> Any:
        value = super().get_state(record)
        return False if value is None else value

    def transform(self, value: Any, record: RecordType) -> Any:
        icon, color, label = self.choose(value)
        result = Markup('<i class="{} {}"></i>').format(icon, color)
        if label:
            result += Markup(' <span class="ml-1">{}</span>').format(label)
        return result

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["trueIcon"] = self.true_icon
        result["falseIcon"] = self.false_icon
        result["trueColor"] = self.true_color
        result["falseColor"] = self.false_color
        result["trueLabel"] = self.true_label
        result["falseLabel"] = self.false_label
        return result


class BooleanInfo(ColumnInfo):
    """Parser for information about a boolean column.

    Attributes:
        true_icon: The icon class used for true values.
        false_icon: The icon class used for false values.
        true_color: The color class used for true values.
        false_color: The color class used for false values.
        true_label: Text shown next to the icon for true values.
        false_label: Text shown next to the icon for false values.
    """

    true_icon: Optional[str] = None
    false_icon: Optional[str] = None
    true_color: Optional[str] = None
    false_color: Optional[str] = None
    true_label: Optional[str] = None
    false_label: Optional[str] = None
