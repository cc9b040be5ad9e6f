from decimal import Decimal
from sqlalchemy import String, Numeric, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional

from retail_dashboard.core.db.base import BaseModel

if TYPE_CHECKING:
    from retail_dashboard.modules.locations.models import Location
    from retail_dashboard.modules.profiles.models import Profile


class Sale(BaseModel):
    """
    Sale model - a completed checkout at a location, recorded by a staff profile.
    Extends BaseModel which provides: id, created_at, updated_at
    """

    __tablename__ = "sales"

    __table_args__ = (
        Index("idx_sale_organization_created", "organization_id", "created_at"),
    )

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", name="fk_sale_organization_id"),
        nullable=False,
    )

    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id", name="fk_sale_location_id"),
        nullable=False,
        index=True,
    )

    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", name="fk_sale_profile_id"),
        nullable=False,
        index=True,
    )

    total: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=0,
    )

    # Free-form code (cash, qr, card, ...); unknown codes are displayed generically
    payment_method: Mapped[str] = mapped_column(String(30), nullable=False)

    customer_name: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, default=None
    )

    # Relationships
    profile: Mapped["Profile"] = relationship("Profile")

    location: Mapped["Location"] = relationship("Location")

    items: Mapped[list["SaleItem"]] = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Sale(id={self.id}, total={self.total}, payment_method='{self.payment_method}')>"


class SaleItem(BaseModel):
    """
    Sale line item - quantity of one product within a sale.
    """

    __tablename__ = "sale_items"

    sale_id: Mapped[int] = mapped_column(
        ForeignKey("sales.id", ondelete="CASCADE", name="fk_sale_item_sale_id"),
        nullable=False,
        index=True,
    )

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", name="fk_sale_item_product_id"),
        nullable=False,
        index=True,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=0,
    )

    # Relationships
    sale: Mapped["Sale"] = relationship("Sale", back_populates="items")

    def __repr__(self) -> str:
        return f"<SaleItem(id={self.id}, sale_id={self.sale_id}, quantity={self.quantity})>"
