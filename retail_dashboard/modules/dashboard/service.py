"""
DashboardService - Business logic for aggregating dashboard data.

Five independent reads run concurrently, each on its own session, and are
combined once all of them have settled. A read that fails only blanks its
own metric.
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, Awaitable, List, Optional, Tuple
from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from retail_dashboard.core.utils import local_now, start_of_day, to_decimal
from retail_dashboard.modules.inventory.models import Inventory
from retail_dashboard.modules.locations.models import Location
from retail_dashboard.modules.products.models import Product
from retail_dashboard.modules.sales.models import Sale
from .components import payment_display, stock_severity
from .constants import (
    DEFAULT_CUSTOMER_NAME,
    LOW_STOCK_LIMIT,
    LOW_STOCK_THRESHOLD,
    READ_LOW_STOCK,
    READ_RECENT_SALES,
    READ_SALES_TODAY,
    READ_TOTAL_PRODUCTS,
    READ_TOTAL_STOCK,
    RECENT_SALES_LIMIT,
)
from .schemas import (
    DashboardResponse,
    DashboardStatsResponse,
    LowStockItemResponse,
    RecentSaleResponse,
)

logger = logging.getLogger(__name__)

SessionFactory = async_sessionmaker[AsyncSession]


async def _isolated(name: str, read: Awaitable[Any], default: Any) -> Tuple[str, Any, bool]:
    """Await one read; on failure log it and hand back the default instead."""
    try:
        return name, await read, True
    except Exception:
        logger.exception("Dashboard read '%s' failed, using empty default", name)
        return name, default, False


class DashboardService:
    """
    Dashboard service aggregating all metrics for one organization.
    """

    @staticmethod
    async def get_dashboard_data(
        session_factory: SessionFactory,
        organization_id: int,
        now: Optional[datetime] = None,
    ) -> DashboardResponse:
        """
        Get all dashboard data for an organization.

        Args:
            session_factory: Factory used to open one session per read
            organization_id: Tenant whose data is aggregated
            now: Render instant in local time; "today" starts at its midnight

        Returns:
            Stats, low-stock list, recent sales and the names of failed reads
        """
        now = now or local_now()
        today_start = start_of_day(now)
        started = time.perf_counter()

        outcomes = await asyncio.gather(
            _isolated(
                READ_TOTAL_PRODUCTS,
                DashboardService._count_active_products(session_factory, organization_id),
                0,
            ),
            _isolated(
                READ_TOTAL_STOCK,
                DashboardService._sum_total_stock(session_factory, organization_id),
                0,
            ),
            _isolated(
                READ_SALES_TODAY,
                DashboardService._sales_since(session_factory, organization_id, today_start),
                (to_decimal(0), 0),
            ),
            _isolated(
                READ_LOW_STOCK,
                DashboardService._low_stock_items(session_factory, organization_id),
                [],
            ),
            _isolated(
                READ_RECENT_SALES,
                DashboardService._recent_sales(session_factory, organization_id),
                [],
            ),
        )

        results = {name: value for name, value, _ in outcomes}
        unavailable = [name for name, _, ok in outcomes if not ok]

        sales_total, sales_count = results[READ_SALES_TODAY]
        low_stock_items = results[READ_LOW_STOCK]

        stats = DashboardStatsResponse(
            total_products=results[READ_TOTAL_PRODUCTS],
            total_stock=results[READ_TOTAL_STOCK],
            sales_today_total=sales_total,
            sales_today_count=sales_count,
            low_stock_count=len(low_stock_items),
        )

        logger.debug(
            "Dashboard for organization %s built in %.1f ms (unavailable: %s)",
            organization_id,
            (time.perf_counter() - started) * 1000,
            unavailable or "none",
        )

        return DashboardResponse(
            organization_id=organization_id,
            generated_at=now,
            stats=stats,
            low_stock_items=low_stock_items,
            recent_sales=results[READ_RECENT_SALES],
            unavailable=unavailable,
        )

    @staticmethod
    async def _count_active_products(
        session_factory: SessionFactory, organization_id: int
    ) -> int:
        async with session_factory() as db:
            total = await db.scalar(
                select(func.count(Product.id)).where(
                    Product.organization_id == organization_id,
                    Product.is_active.is_(True),
                )
            )
        return total or 0

    @staticmethod
    async def _sum_total_stock(
        session_factory: SessionFactory, organization_id: int
    ) -> int:
        async with session_factory() as db:
            total = await db.scalar(
                select(func.sum(Inventory.quantity))
                .select_from(Inventory)
                .join(Product, Inventory.product_id == Product.id)
                .where(Product.organization_id == organization_id)
            )
        return int(total or 0)

    @staticmethod
    async def _sales_since(
        session_factory: SessionFactory, organization_id: int, since: datetime
    ) -> tuple:
        """Sum and count of sales created at or after ``since``."""
        async with session_factory() as db:
            result = await db.execute(
                select(func.sum(Sale.total), func.count(Sale.id)).where(
                    Sale.organization_id == organization_id,
                    Sale.created_at >= since,
                )
            )
            total, count = result.one()
        return to_decimal(total), count or 0

    @staticmethod
    async def _low_stock_items(
        session_factory: SessionFactory, organization_id: int
    ) -> List[LowStockItemResponse]:
        query = (
            select(
                Inventory.quantity,
                Inventory.min_stock,
                Inventory.location_id,
                Product.id.label("product_id"),
                Product.name.label("product_name"),
                Product.sku,
                Location.name.label("location_name"),
            )
            .select_from(Inventory)
            .join(Product, Inventory.product_id == Product.id)
            .outerjoin(Location, Inventory.location_id == Location.id)
            .where(
                Product.organization_id == organization_id,
                Inventory.quantity < LOW_STOCK_THRESHOLD,
            )
            .order_by(Inventory.quantity.asc(), Inventory.id.asc())
            .limit(LOW_STOCK_LIMIT)
        )
        async with session_factory() as db:
            rows = (await db.execute(query)).all()

        return [
            LowStockItemResponse(
                product_id=row.product_id,
                product_name=row.product_name,
                sku=row.sku,
                location_id=row.location_id,
                location_name=row.location_name,
                quantity=row.quantity,
                min_stock=row.min_stock,
                severity=stock_severity(row.quantity).value,
            )
            for row in rows
        ]

    @staticmethod
    async def _recent_sales(
        session_factory: SessionFactory, organization_id: int
    ) -> List[RecentSaleResponse]:
        query = (
            select(Sale)
            .where(Sale.organization_id == organization_id)
            .options(
                selectinload(Sale.items),
                selectinload(Sale.profile),
                selectinload(Sale.location),
            )
            .order_by(desc(Sale.created_at), desc(Sale.id))
            .limit(RECENT_SALES_LIMIT)
        )
        async with session_factory() as db:
            sales = (await db.execute(query)).scalars().all()

            recent = []
            for sale in sales:
                display = payment_display(sale.payment_method)
                recent.append(
                    RecentSaleResponse(
                        id=sale.id,
                        total=to_decimal(sale.total),
                        payment_method=sale.payment_method,
                        payment_label=display.label,
                        payment_icon=display.icon,
                        created_at=sale.created_at,
                        customer_name=sale.customer_name or DEFAULT_CUSTOMER_NAME,
                        staff_name=sale.profile.full_name if sale.profile else None,
                        location_name=sale.location.name if sale.location else None,
                        total_items=sum(item.quantity for item in sale.items),
                    )
                )
        return recent
