import re
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from math import isfinite
from typing import Any, Iterable, Union

import inflect

from extable.constants import TRUNCATION_MARKER

inflect_e = inflect.engine()

NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

# Formats tried, in order, after ISO-8601 parsing fails.
DATE_TIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%d-%m-%Y",
    "%m/%d/%Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)

BOOL_TRUE_STRINGS = ("1", "true", "on", "yes")


def humanize(name: str) -> str:
    """Turn a snake_case key into a label (`unit_price` -> `Unit price`)."""
    text = (name or "").replace("_", " ")
    return text[:1].upper() + text[1:]


def to_text(value: Any) -> str:
    """String representation of a value where `None` becomes empty."""
    if value is None:
        return ""
    return str(value)


def is_numeric(value: Any) -> bool:
    """Check if the value is a finite number or a string that looks like one.

    Booleans are not considered numeric and neither are values whose float
    form is not finite (`nan`, `1e400`, integers too large for a float).
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        if NUMERIC_RE.match(value) is None:
            return False
    elif not isinstance(value, (int, float, Decimal)):
        return False
    try:
        return isfinite(float(value))
    except (OverflowError, ValueError):
        return False


def to_float(value: Any) -> float:
    """Coerce a value to a finite float; anything else becomes 0.0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if not is_numeric(value):
        return 0.0
    return float(value)


def to_bool(value: Any) -> bool:
    """Coerce a value to a boolean.

    `True`, non-zero numbers and the strings `1`, `true`, `on` and `yes`
    (case insensitive) are true. Everything else is false.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return not value.is_zero()
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in BOOL_TRUE_STRINGS
    return False


def format_number(
    value: Any,
    decimals: int = 0,
    decimal_separator: str = ".",
    thousands_separator: str = ",",
) -> str:
    """Format a number with grouped thousands and a fixed number of decimals.

    Halves are rounded away from zero. Values that are not numeric are
    formatted as zero.

    Args:
        value: The value to format.
        decimals: The number of digits after the decimal separator.
        decimal_separator: The string placed between the integer part and
            the decimals.
        thousands_separator: The string placed between groups of three
            digits in the integer part.

    Returns:
        The formatted number.
    """
    decimals = max(0, int(decimals))
    number = Decimal(repr(to_float(value)))
    with localcontext() as ctx:
        # Large amounts need more digits than the default precision.
        ctx.prec = max(ctx.prec, number.adjusted() + decimals + 2)
        number = number.quantize(Decimal(1).scaleb(-decimals), ROUND_HALF_UP)
    if number == 0:
        number = number.copy_abs()

    text = f"{number:,.{decimals}f}"
    return (
        text.replace(",", "\0")
        .replace(".", decimal_separator)
        .replace("\0", thousands_separator)
    )


def truncate(text: str, limit: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut the text to `limit` characters and append the marker.

    The length is measured in characters, not bytes, so multi-byte text is
    never split inside a character.
    """
    if limit is None or len(text) <= limit:
        return text
    return text[:limit] + marker


def parse_date_time(value: Any) -> Union[date, datetime]:
    """Interpret a value as a date or a moment in time.

    Date and datetime instances are returned as they are, numbers are
    treated as UNIX timestamps (UTC) and strings are parsed as ISO-8601
    or one of the `DATE_TIME_FORMATS`.

    Raises:
        ValueError: The value cannot be interpreted.
    """
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Invalid timestamp {value!r}") from exc
    if not isinstance(value, str):
        raise ValueError(f"Cannot interpret {type(value)} as a date")

    text = value.strip()
    if not text:
        raise ValueError("Empty date string")

    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass

    for fmt in DATE_TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date format: {value!r}")


def to_date(value: Any) -> date:
    """Parse the value and keep only the date component.

    Raises:
        ValueError: The value cannot be interpreted.
    """
    result = parse_date_time(value)
    if isinstance(result, datetime):
        return result.date()
    return result


def join_words(items: Iterable[Any], conj: str = "and") -> str:
    """Join the items in prose (`a, b, and c`)."""
    return inflect_e.join([to_text(i) for i in items], conj=conj)
