"""
Profiles Router - exposes how the current credentials resolve.
"""

from fastapi import APIRouter, Depends

from retail_dashboard.core.response_interceptor import CustomAPIRoute
from .auth import ViewerContext, get_viewer
from .schemas import ProfileResponse, ViewerResponse

router = APIRouter(prefix="/profiles", tags=["profiles"], route_class=CustomAPIRoute)


@router.get("/me", response_model=ViewerResponse)
async def get_current_viewer(viewer: ViewerContext = Depends(get_viewer)):
    """
    Describe the current viewer.

    Always 200: the state field tells whether the caller is authenticated,
    unauthenticated, or authenticated without an organization.
    """
    return ViewerResponse(
        state=viewer.state,
        profile=ProfileResponse.model_validate(viewer.profile) if viewer.profile else None,
        organization_id=viewer.organization_id,
    )
