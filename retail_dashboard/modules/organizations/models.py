from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from retail_dashboard.core.db.base import BaseModel


class Organization(BaseModel):
    """
    Organization model - the tenant every other entity is scoped to.
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name='{self.name}')>"
