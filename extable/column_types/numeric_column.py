from typing import Any, Dict, Optional, TypeVar

from attrs import define, field

from extable.column import ColumnInfo, ExColumn
from extable.constants import COLUMN_TYPE_NUMERIC, AlignType, RecordType
from extable.utils import format_number, is_numeric

N = TypeVar("N", bound="NumericColumn")


@define
class NumericColumn(ExColumn):
    """A column that shows numbers with grouped thousands.

    Missing values are displayed as zero. Values that do not look like
    numbers are left untouched. Unlike the other columns the prefix and the
    suffix are applied after `format_using`, and the length limit is not
    applied.

    Attributes:
        decimals: The number of digits after the decimal separator.
        decimal_separator: Placed between the integer part and the decimals.
        thousands_separator: Placed between groups of three digits.
    """

    type_name: str = field(default=COLUMN_TYPE_NUMERIC, init=False)
    align: AlignType = field(default="right")

    decimals: int = field(default=0)
    decimal_separator: str = field(default=".")
    thousands_separator: str = field(default=",")

    def set_decimals(self: N, decimals: int) -> N:
        self.decimals = decimals
        return self

    def set_decimal_separator(self: N, separator: str) -> N:
        self.decimal_separator = separator
        return self

    def set_thousands_separator(self: N, separator: str) -> N:
        self.thousands_separator = separator
        return self

    def transform(self, value: Any, record: RecordType) -> Any:
        if value is None:
            value = 0
        if is_numeric(value):
            value = format_number(
                value,
                self.decimals,
                self.decimal_separator,
                self.thousands_separator,
            )
        if self.format_using is not None:
            value = self.format_using(value, record)
        if self.prefix:
            value = f"{self.prefix}{value}"
        if self.suffix:
            value = f"{value}{self.suffix}"
        return value

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["decimals"] = self.decimals
        result["decimalSeparator"] = self.decimal_separator
        result["thousandsSeparator"] = self.thousands_separator
        return result


class NumericInfo(ColumnInfo):
    """Parser for information about a numeric column.

    Attributes:
        decimals: The number of digits after the decimal separator.
        decimal_separator: Placed between the integer part and the decimals.
        thousands_separator: Placed between groups of three digits.
    """

    decimals: Optional[int] = None
    decimal_separator: Optional[str] = None
    thousands_separator: Optional[str] = None
