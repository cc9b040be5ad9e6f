from datetime import datetime, timedelta
from decimal import Decimal

from retail_dashboard.core.utils import (
    format_currency,
    format_quantity,
    format_sale_timestamp,
    local_now,
    pluralize,
    start_of_day,
)


def test_format_currency_uses_two_decimals():
    assert format_currency(Decimal("35.5")) == "Bs 35.50"
    assert format_currency(10) == "Bs 10.00"
    assert format_currency(0.005) == "Bs 0.01"
    assert format_currency(None) == "Bs 0.00"


def test_format_quantity_groups_thousands():
    assert format_quantity(0) == "0"
    assert format_quantity(1234567) == "1,234,567"


def test_pluralize():
    assert pluralize(1, "venta") == "1 venta"
    assert pluralize(0, "venta") == "0 ventas"
    assert pluralize(2, "ítem") == "2 ítems"


def test_start_of_day():
    assert start_of_day(datetime(2026, 10, 19, 23, 59, 59)) == datetime(2026, 10, 19)
    assert start_of_day(datetime(2026, 10, 19)) == datetime(2026, 10, 19)


def test_format_sale_timestamp_uses_spanish_months():
    assert format_sale_timestamp(datetime(2026, 1, 5, 9, 7)) == "05 ene, 09:07"
    assert format_sale_timestamp(datetime(2026, 12, 31, 23, 59)) == "31 dic, 23:59"


def test_local_now_is_naive_in_requested_zone():
    now = local_now("America/La_Paz")

    assert now.tzinfo is None


def test_dashboard_timezone_moves_the_start_of_today(monkeypatch):
    from retail_dashboard.core import utils

    # UTC+14 and UTC-11 are always on different calendar days
    monkeypatch.setattr(utils.config, "dashboard_timezone", "Pacific/Kiritimati")
    east = local_now()
    west = local_now("Pacific/Pago_Pago")

    assert abs(east - local_now("Pacific/Kiritimati")).total_seconds() < 60
    assert abs((east - west).total_seconds() - 25 * 3600) < 60
    assert start_of_day(east) - start_of_day(west) >= timedelta(days=1)
