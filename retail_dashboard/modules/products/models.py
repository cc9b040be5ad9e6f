from sqlalchemy import String, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from retail_dashboard.core.db.base import BaseModel

if TYPE_CHECKING:
    from retail_dashboard.modules.inventory.models import Inventory


class Product(BaseModel):
    """
    Product model.
    Has a composite unique index on (organization_id, sku).
    """

    __tablename__ = "products"

    __table_args__ = (
        Index("idx_product_organization_sku", "organization_id", "sku", unique=True),
        Index("idx_product_organization_active", "organization_id", "is_active"),
    )

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", name="fk_product_organization_id"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    sku: Mapped[str] = mapped_column(String(100), nullable=False)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )

    # Relationships
    inventory: Mapped[list["Inventory"]] = relationship(
        "Inventory", back_populates="product"
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', sku='{self.sku}')>"
