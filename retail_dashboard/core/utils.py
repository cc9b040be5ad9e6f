"""Core utility functions for time and display formatting"""

from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from zoneinfo import ZoneInfo

from retail_dashboard.core.config import config


CURRENCY_LABEL = "Bs"

# Abbreviated month names as shown in the Spanish locale
SPANISH_MONTHS = [
    "ene",
    "feb",
    "mar",
    "abr",
    "may",
    "jun",
    "jul",
    "ago",
    "sept",
    "oct",
    "nov",
    "dic",
]


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    Current wall-clock time in the dashboard's local zone, as a naive datetime.

    Stored timestamps are naive local times, so the result is stripped of
    tzinfo to stay comparable with them.
    """
    tz_name = tz_name or config.dashboard_timezone
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)
    return datetime.now()


def start_of_day(moment: datetime) -> datetime:
    """Local midnight of the day containing ``moment``."""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def to_decimal(amount: Union[Decimal, float, int, str, None]) -> Decimal:
    if amount is None:
        return Decimal("0.00")
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_currency(amount: Union[Decimal, float, int, None]) -> str:
    """
    Format a monetary amount with the currency label and two decimals.

    Example: 35.5 -> "Bs 35.50"
    """
    return f"{CURRENCY_LABEL} {to_decimal(amount):.2f}"


def format_quantity(quantity: int) -> str:
    """Thousands-separated integer, e.g. 12345 -> "12,345"."""
    return f"{quantity:,}"


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """
    Return "<count> <word>" with the word pluralized when count != 1.

    Example: pluralize(2, "venta") -> "2 ventas"
    """
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def format_sale_timestamp(moment: datetime) -> str:
    """
    Format a timestamp as day, Spanish month abbreviation and time.

    Example: 2026-10-19 14:05 -> "19 oct, 14:05"
    """
    month = SPANISH_MONTHS[moment.month - 1]
    return f"{moment.day:02d} {month}, {moment.hour:02d}:{moment.minute:02d}"
