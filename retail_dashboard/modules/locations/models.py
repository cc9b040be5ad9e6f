from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from retail_dashboard.core.db.base import BaseModel


class Location(BaseModel):
    """
    Location model - a store or warehouse belonging to an organization.
    """

    __tablename__ = "locations"

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", name="fk_location_organization_id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name='{self.name}')>"
