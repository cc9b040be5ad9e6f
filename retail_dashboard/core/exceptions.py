"""
Exception classes for the dashboard API.
"""

from fastapi import HTTPException, status


class UnauthorizedError(HTTPException):
    """Raised when the request carries no usable credentials."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


class NoOrganizationError(HTTPException):
    """Raised when an authenticated profile is not attached to an organization."""

    def __init__(self, message: str = "Profile is not linked to an organization"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)
