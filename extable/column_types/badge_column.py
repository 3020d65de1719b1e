from collections.abc import Hashable
from typing import Any, Dict, Optional, Tuple, TypeVar

from attrs import define, field
from markupsafe import Markup

from extable.column import ColumnInfo, ExColumn
from extable.constants import (
    BADGE_COLOR_CLASSES,
    COLUMN_TYPE_BADGE,
    DEFAULT_BADGE_COLOR,
    EMPTY_PLACEHOLDER,
    RecordType,
)
from extable.utils import humanize, to_text

B = TypeVar("B", bound="BadgeColumn")


def value_matches(match: Any, value: Any) -> bool:
    """Check a value against a scalar or a collection of values."""
    if isinstance(match, (set, frozenset)):
        return isinstance(value, Hashable) and value in match
    if isinstance(match, (list, tuple)):
        return value in match
    return match == value


@define
class BadgeColumn(ExColumn):
    """A column that shows the value as a colored pill.

    The color and the icon are looked up in mappings where the key is the
    color (or the icon) and the value is either a single value or a list of
    values. Mappings are tested in the order in which they were declared
    and the first match wins.

    Example:
        ```python
        BadgeColumn.make("status").set_colors(
            {"green": "active", "yellow": ["pending", "review"]}
        )
        ```

    Attributes:
        colors: Maps color names to the values that get that color.
        icons: Maps icon classes to the values that get that icon.
        labels: Maps values to the text shown inside the badge. Values
            without an entry are humanized.
    """

    type_name: str = field(default=COLUMN_TYPE_BADGE, init=False)
    html: bool = field(default=True)

    colors: Dict[str, Any] = field(factory=dict)
    icons: Dict[str, Any] = field(factory=dict)
    labels: Dict[Any, str] = field(factory=dict)

    def set_colors(self: B, colors: Dict[str, Any]) -> B:
        self.colors = dict(colors)
        return self

    def set_icons(self: B, icons: Dict[str, Any]) -> B:
        self.icons = dict(icons)
        return self

    def set_labels(self: B, labels: Dict[Any, str]) -> B:
        self.labels = dict(labels)
        return self

    def get_color(self, value: Any) -> str:
        for color, match in self.colors.items():
            if value_matches(match, value):
                return color
        return DEFAULT_BADGE_COLOR

    def get_icon(self, value: Any) -> Optional[str]:
        for icon, match in self.icons.items():
            if value_matches(match, value):
                return icon
        return None

    def get_label_text(self, value: Any) -> str:
        if isinstance(value, Hashable) and value in self.labels:
            return self.labels[value]
        return humanize(to_text(value))

    @staticmethod
    def get_color_class(color: str) -> str:
        return BADGE_COLOR_CLASSES.get(
            color, BADGE_COLOR_CLASSES[DEFAULT_BADGE_COLOR]
        )

    def describe(self, value: Any) -> Tuple[str, Optional[str], str]:
        """Compute the (color, icon, label) triplet for a value."""
        return (
            self.get_color(value),
            self.get_icon(value),
            self.get_label_text(value),
        )

    def transform(self, value: Any, record: RecordType) -> Any:
        if value is None or value == "":
            return EMPTY_PLACEHOLDER

        color, icon, label = self.describe(value)
        result = Markup('<span class="badge {}">').format(
            self.get_color_class(color)
        )
        if icon:
            result += Markup('<i class="{} mr-1"></i>').format(icon)
        result += Markup("{}</span>").format(label)
        return result

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["colors"] = dict(self.colors)
        result["icons"] = dict(self.icons)
        result["labels"] = dict(self.labels)
        return result


class BadgeInfo(ColumnInfo):
    """Parser for information about a badge column.

    Attributes:
        colors: Maps color names to the values that get that color.
        icons: Maps icon classes to the values that get that icon.
        labels: Maps values to the text shown inside the badge.
    """

    colors: Optional[Dict[str, Any]] = None
    icons: Optional[Dict[str, Any]] = None
    labels: Optional[Dict[Any, str]] = None
