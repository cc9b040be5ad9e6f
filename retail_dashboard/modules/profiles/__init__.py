"""Profiles module"""

from .models import Profile, Role
from .auth import AuthService, AuthState, ViewerContext, get_viewer, require_organization
from .router import router

__all__ = [
    "Profile",
    "Role",
    "AuthService",
    "AuthState",
    "ViewerContext",
    "get_viewer",
    "require_organization",
    "router",
]
