from sqlalchemy import Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from retail_dashboard.core.db.base import BaseModel

if TYPE_CHECKING:
    from retail_dashboard.modules.locations.models import Location
    from retail_dashboard.modules.products.models import Product


class Inventory(BaseModel):
    """
    Inventory model - stock of one product at one location.
    Has a composite unique index on (product_id, location_id).
    """

    __tablename__ = "inventory"

    __table_args__ = (
        Index("idx_inventory_product_location", "product_id", "location_id", unique=True),
        Index("idx_inventory_quantity", "quantity"),
    )

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE", name="fk_inventory_product_id"),
        nullable=False,
    )

    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id", ondelete="CASCADE", name="fk_inventory_location_id"),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Carried for display; the low-stock alert uses a fixed threshold
    min_stock: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="inventory")

    location: Mapped["Location"] = relationship("Location")

    def __repr__(self) -> str:
        return (
            f"<Inventory(id={self.id}, product_id={self.product_id}, "
            f"location_id={self.location_id}, quantity={self.quantity})>"
        )
