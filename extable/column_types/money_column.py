from typing import Any, Dict, Optional, TypeVar

from attrs import define, field

from extable.column import ColumnInfo, ExColumn
from extable.constants import (
    COLUMN_TYPE_MONEY,
    CURRENCY_SYMBOLS,
    AlignType,
    RecordType,
)
from extable.utils import format_number

M = TypeVar("M", bound="MoneyColumn")


@define
class MoneyColumn(ExColumn):
    """A column that shows amounts of money.

    Missing values are displayed as zero. The amount is formatted with
    `decimals` digits, passed through `format_using` and finally prefixed
    with the currency symbol.

    Attributes:
        currency: The ISO 4217 code of the currency (upper case).
        decimals: The number of digits after the decimal separator.
        show_symbol: Whether the currency symbol is placed in front of the
            amount.
    """

    type_name: str = field(default=COLUMN_TYPE_MONEY, init=False)
    align: AlignType = field(default="right")

    currency: str = field(default="USD", converter=str.upper)
    decimals: int = field(default=2)
    show_symbol: bool = field(default=True)

    def set_currency(self: M, currency: str) -> M:
        self.currency = currency.upper()
        return self

    def set_decimals(self: M, decimals: int) -> M:
        self.decimals = decimals
        return self

    def set_show_symbol(self: M, show: bool = True) -> M:
        self.show_symbol = show
        return self

    @property
    def currency_symbol(self) -> str:
        """The symbol of the currency or the code itself if not known."""
        return CURRENCY_SYMBOLS.get(self.currency, self.currency)

    def transform(self, value: Any, record: RecordType) -> Any:
        formatted = format_number(
            0 if value is None else value, self.decimals
        )
        if self.format_using is not None:
            formatted = self.format_using(formatted, record)
        if self.show_symbol:
            formatted = f"{self.currency_symbol} {formatted}"
        return formatted

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["currency"] = self.currency
        result["decimals"] = self.decimals
        result["showSymbol"] = self.show_symbol
        return result


class MoneyInfo(ColumnInfo):
    """Parser for information about a money column.

    Attributes:
        currency: The ISO 4217 code of the currency.
        decimals: The number of digits after the decimal separator.
        show_symbol: Whether the currency symbol is shown.
    """

    currency: Optional[str] = None
    decimals: Optional[int] = None
    show_symbol: Optional[bool] = None
