"""
Profile DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel
from typing import Optional
from .auth import AuthState
from .models import Role


class ProfileResponse(BaseModel):
    """Response model for Profile entity"""

    id: int
    username: str
    full_name: str
    role: Role
    organization_id: Optional[int] = None

    class Config:
        from_attributes = True


class ViewerResponse(BaseModel):
    """Resolved viewer state for the current credentials"""

    state: AuthState
    profile: Optional[ProfileResponse] = None
    organization_id: Optional[int] = None
