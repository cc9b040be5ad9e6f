"""
Authentication utilities for JWT-based auth.

Tokens are issued by the sign-in flow of the main application; this service
only verifies them and resolves who is looking at the dashboard. Resolution
never assumes a user or an organization is present: it yields a
``ViewerContext`` whose ``state`` says which of the three outcomes applies.
"""

import enum
import logging
from typing import Optional, Any, Dict
from dataclasses import dataclass
import jwt
from jwt.exceptions import PyJWTError, ExpiredSignatureError
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from retail_dashboard.core.config import config
from retail_dashboard.core.db.engine import get_db_util
from retail_dashboard.core.exceptions import NoOrganizationError, UnauthorizedError
from .models import Profile

logger = logging.getLogger(__name__)

# Missing credentials are an outcome, not an error, so no auto 403 here
security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"


@dataclass
class TokenData:
    """Token payload data structure with type safety"""
    user_id: int
    username: str
    role: str


class AuthState(str, enum.Enum):
    authenticated = "authenticated"
    unauthenticated = "unauthenticated"
    no_organization = "no_organization"


@dataclass
class ViewerContext:
    """Outcome of resolving the current viewer."""
    state: AuthState
    profile: Optional[Profile] = None
    organization_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.authenticated


class AuthService:

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token with user data and expiration.

        Args:
            data: Dictionary with "sub" (username), "user_id" and "role"
            expires_delta: Optional custom expiration time, defaults to config value

        Returns:
            Encoded JWT token as string
        """
        now = datetime.now(timezone.utc)
        expire = now + (
            expires_delta or timedelta(minutes=config.access_token_expire_minutes)
        )
        to_encode = data.copy()
        to_encode.update({"exp": expire, "iat": now, "type": "access"})
        return jwt.encode(to_encode, config.secret_key, algorithm=config.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[TokenData]:
        """
        Verify and decode a JWT access token.

        Returns:
            TokenData if the token is valid, None if it is expired, malformed
            or missing a required claim
        """
        try:
            payload: Dict[str, Any] = jwt.decode(
                token, config.secret_key, algorithms=[config.algorithm]
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired access token")
            return None
        except PyJWTError:
            return None

        user_id: Optional[int] = payload.get("user_id")
        username: Optional[str] = payload.get("sub")
        role: Optional[str] = payload.get("role")

        if username is None or user_id is None or role is None:
            return None

        return TokenData(user_id=user_id, username=username, role=role)


def _extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def resolve_viewer(db: AsyncSession, token: Optional[str]) -> ViewerContext:
    """
    Resolve the viewer behind a token: token -> profile -> organization.
    """
    if not token:
        return ViewerContext(state=AuthState.unauthenticated)

    token_data = AuthService.verify_token(token)
    if token_data is None:
        return ViewerContext(state=AuthState.unauthenticated)

    profile = await db.get(Profile, token_data.user_id)
    if profile is None:
        logger.warning("Token references unknown profile %s", token_data.user_id)
        return ViewerContext(state=AuthState.unauthenticated)

    if profile.organization_id is None:
        return ViewerContext(state=AuthState.no_organization, profile=profile)

    return ViewerContext(
        state=AuthState.authenticated,
        profile=profile,
        organization_id=profile.organization_id,
    )


async def get_viewer(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_util),
) -> ViewerContext:
    """Dependency resolving the current viewer; never raises."""
    return await resolve_viewer(db, _extract_token(request, credentials))


async def require_organization(
    viewer: ViewerContext = Depends(get_viewer),
) -> ViewerContext:
    """
    Dependency for JSON endpoints that need an organization.

    Raises:
        UnauthorizedError: no valid credentials or unknown profile
        NoOrganizationError: profile is not linked to an organization
    """
    if viewer.state == AuthState.unauthenticated:
        raise UnauthorizedError("Invalid authentication credentials")
    if viewer.state == AuthState.no_organization:
        raise NoOrganizationError()
    return viewer
