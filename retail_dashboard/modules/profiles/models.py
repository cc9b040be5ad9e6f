import enum
from sqlalchemy import String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional

from retail_dashboard.core.db.base import BaseModel


class Role(str, enum.Enum):
    """Staff role enum"""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


class Profile(BaseModel):
    """
    Profile model - a staff member of an organization.
    organization_id stays NULL until the profile is attached to one.
    """

    __tablename__ = "profiles"

    username: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, name="profiles_role_enum", native_enum=False),
        nullable=False,
        default=Role.STAFF,
        server_default=Role.STAFF.value,
    )

    organization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organizations.id", name="fk_profile_organization_id"),
        nullable=True,
        default=None,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, username='{self.username}', role={self.role.value})>"
