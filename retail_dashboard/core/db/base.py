from datetime import datetime
from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from retail_dashboard.core.utils import local_now


class Base(DeclarativeBase):
    """Base class for all database models"""

    pass


class BaseModel(Base):
    """
    Abstract base model that provides common fields for all entities.
    Timestamps are naive datetimes in the dashboard's local zone.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=local_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        default=local_now,
        server_default=func.now(),
        onupdate=local_now,
    )
