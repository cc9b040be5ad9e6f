"""
Presentational helpers for the dashboard page.

Everything here is a pure mapping from dashboard data to display models;
the Jinja2 templates only lay these out.
"""

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from retail_dashboard.core.utils import (
    format_currency,
    format_quantity,
    format_sale_timestamp,
    pluralize,
)
from .constants import (
    READ_LOW_STOCK,
    READ_SALES_TODAY,
    READ_TOTAL_PRODUCTS,
    READ_TOTAL_STOCK,
)
from .schemas import (
    CardColor,
    DashboardResponse,
    DashboardStatsResponse,
    DashboardViewResponse,
    LowStockItemResponse,
    LowStockRow,
    RecentSaleResponse,
    RecentSaleRow,
    StatCard,
)


COLOR_MAP: Dict[str, Dict[str, str]] = {
    "blue": {"bg": "bg-blue-50", "icon": "bg-blue-600", "text": "text-blue-600"},
    "green": {"bg": "bg-emerald-50", "icon": "bg-emerald-600", "text": "text-emerald-600"},
    "orange": {"bg": "bg-amber-50", "icon": "bg-amber-600", "text": "text-amber-600"},
    "red": {"bg": "bg-red-50", "icon": "bg-red-600", "text": "text-red-600"},
    "purple": {"bg": "bg-purple-50", "icon": "bg-purple-600", "text": "text-purple-600"},
}

UNAVAILABLE_VALUE = "—"
UNAVAILABLE_SUBTITLE = "No disponible"


def build_stat_card(
    title: str,
    value: Union[str, int],
    icon: str,
    color: CardColor,
    subtitle: Optional[str] = None,
) -> StatCard:
    """
    Build a stat card.

    Raises:
        ValueError: if color is not one of the supported card colors
    """
    if color not in COLOR_MAP:
        raise ValueError(f"Unsupported card color: {color}")
    colors = COLOR_MAP[color]
    return StatCard(
        title=title,
        value=str(value),
        icon=icon,
        color=color,
        subtitle=subtitle,
        bg_class=colors["bg"],
        icon_class=colors["icon"],
        text_class=colors["text"],
    )


def build_stat_cards(
    stats: DashboardStatsResponse, unavailable: Iterable[str] = ()
) -> List[StatCard]:
    """The four summary cards, in page order."""
    unavailable = set(unavailable)

    def _card(read_name, title, value, icon, color, subtitle):
        if read_name in unavailable:
            return build_stat_card(title, UNAVAILABLE_VALUE, icon, "orange", UNAVAILABLE_SUBTITLE)
        return build_stat_card(title, value, icon, color, subtitle)

    low_stock = stats.low_stock_count
    return [
        _card(
            READ_TOTAL_PRODUCTS,
            "Total Productos",
            stats.total_products,
            "package",
            "blue",
            "Productos activos",
        ),
        _card(
            READ_TOTAL_STOCK,
            "Stock Total",
            format_quantity(stats.total_stock),
            "layers",
            "green",
            "Unidades en inventario",
        ),
        _card(
            READ_SALES_TODAY,
            "Ventas Hoy",
            format_currency(stats.sales_today_total),
            "shopping-cart",
            "purple",
            pluralize(stats.sales_today_count, "venta"),
        ),
        _card(
            READ_LOW_STOCK,
            "Bajo Stock",
            low_stock,
            "alert-triangle",
            "red" if low_stock > 0 else "green",
            "Requieren atención" if low_stock > 0 else "Todo en orden",
        ),
    ]


class StockSeverity(str, enum.Enum):
    """Low-stock tiers, most severe first."""

    empty = "empty"
    critical = "critical"
    low = "low"


SEVERITY_BADGES = {
    StockSeverity.empty: "bg-red-100 text-red-700",
    StockSeverity.critical: "bg-orange-100 text-orange-700",
    StockSeverity.low: "bg-yellow-100 text-yellow-700",
}


def stock_severity(quantity: int) -> StockSeverity:
    """0 -> empty, 1..5 -> critical, anything above -> low."""
    if quantity <= 0:
        return StockSeverity.empty
    if quantity <= 5:
        return StockSeverity.critical
    return StockSeverity.low


@dataclass(frozen=True)
class PaymentDisplay:
    label: str
    icon: str


PAYMENT_DISPLAYS: Dict[str, PaymentDisplay] = {
    "cash": PaymentDisplay(label="Efectivo", icon="banknote"),
    "qr": PaymentDisplay(label="QR", icon="qr-code"),
    "card": PaymentDisplay(label="Tarjeta", icon="credit-card"),
}

DEFAULT_PAYMENT_DISPLAY = PaymentDisplay(label="Otro", icon="credit-card")


def payment_display(code: Optional[str]) -> PaymentDisplay:
    """Display label and icon for a payment method code; unknown codes get the default."""
    return PAYMENT_DISPLAYS.get(code or "", DEFAULT_PAYMENT_DISPLAY)


def low_stock_rows(items: Iterable[LowStockItemResponse]) -> List[LowStockRow]:
    rows = []
    for item in items:
        severity = stock_severity(item.quantity)
        rows.append(
            LowStockRow(
                product_name=item.product_name,
                sku=item.sku,
                location_name=item.location_name or UNAVAILABLE_VALUE,
                quantity=item.quantity,
                severity=severity.value,
                badge_class=SEVERITY_BADGES[severity],
            )
        )
    return rows


def recent_sale_rows(sales: Iterable[RecentSaleResponse]) -> List[RecentSaleRow]:
    rows = []
    for sale in sales:
        details = " · ".join(
            [
                sale.staff_name or UNAVAILABLE_VALUE,
                sale.location_name or UNAVAILABLE_VALUE,
                pluralize(sale.total_items, "ítem"),
            ]
        )
        rows.append(
            RecentSaleRow(
                id=sale.id,
                customer_name=sale.customer_name,
                details=details,
                total=format_currency(sale.total),
                timestamp=format_sale_timestamp(sale.created_at),
                payment_label=sale.payment_label,
                payment_icon=sale.payment_icon,
            )
        )
    return rows


def build_dashboard_view(dashboard: DashboardResponse) -> DashboardViewResponse:
    """Attach cards and display rows to aggregated dashboard data."""
    return DashboardViewResponse(
        dashboard=dashboard,
        cards=build_stat_cards(dashboard.stats, dashboard.unavailable),
        low_stock_rows=low_stock_rows(dashboard.low_stock_items),
        recent_sale_rows=recent_sale_rows(dashboard.recent_sales),
    )
