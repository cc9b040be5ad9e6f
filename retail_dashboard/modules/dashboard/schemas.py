"""
Dashboard DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from decimal import Decimal


CardColor = Literal["blue", "green", "orange", "red", "purple"]


class DashboardStatsResponse(BaseModel):
    """Summary metrics for the stat cards"""

    total_products: int = Field(0, description="Active products in the organization")
    total_stock: int = Field(0, description="Units in inventory across all locations")
    sales_today_total: Decimal = Field(Decimal("0.00"), description="Sum of sales since local midnight")
    sales_today_count: int = Field(0, description="Number of sales since local midnight")
    low_stock_count: int = Field(0, description="Entries in the low-stock list")


class LowStockItemResponse(BaseModel):
    """Inventory row below the low-stock threshold"""

    product_id: int
    product_name: str
    sku: str
    location_id: int
    location_name: Optional[str] = None
    quantity: int
    min_stock: int
    severity: str


class RecentSaleResponse(BaseModel):
    """One of the latest sales with its display lookups"""

    id: int
    total: Decimal
    payment_method: str
    payment_label: str
    payment_icon: str
    created_at: datetime
    customer_name: str
    staff_name: Optional[str] = None
    location_name: Optional[str] = None
    total_items: int


class StatCard(BaseModel):
    """Presentational card: title, value, icon, color and optional subtitle"""

    title: str
    value: str
    icon: str
    color: CardColor
    subtitle: Optional[str] = None
    bg_class: str
    icon_class: str
    text_class: str


class LowStockRow(BaseModel):
    product_name: str
    sku: str
    location_name: str
    quantity: int
    severity: str
    badge_class: str


class RecentSaleRow(BaseModel):
    id: int
    customer_name: str
    details: str
    total: str
    timestamp: str
    payment_label: str
    payment_icon: str


class DashboardResponse(BaseModel):
    """Complete dashboard data response"""

    organization_id: int
    generated_at: datetime
    stats: DashboardStatsResponse
    low_stock_items: List[LowStockItemResponse]
    recent_sales: List[RecentSaleResponse]
    unavailable: List[str] = Field(
        default_factory=list, description="Reads that failed and fell back to empty"
    )


class DashboardViewResponse(BaseModel):
    """Dashboard data plus the rendered cards and rows"""

    dashboard: DashboardResponse
    cards: List[StatCard]
    low_stock_rows: List[LowStockRow]
    recent_sale_rows: List[RecentSaleRow]
