from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.core.permissions import (
    ROLE_COLORS,
    ROLE_LABELS,
    PagePermission,
    get_accessible_menu_items,
    has_page_access,
)
from app.models.user import User as UserModel
from app.schemas.auth import Navigation, PageAccess

router = APIRouter()

@router.get("/menu", response_model=Navigation)
def get_menu(current_user: UserModel = Depends(deps.get_current_user)):
    """Menu entries the current user may see"""
    role = current_user.role
    return Navigation(
        role=role,
        role_label=ROLE_LABELS[role],
        role_color=ROLE_COLORS[role],
        items=get_accessible_menu_items(role),
    )

@router.get("/access/{permission}", response_model=PageAccess)
def check_access(
    permission: str,
    current_user: UserModel = Depends(deps.get_current_user)
):
    """Whether the current user may open pages gated by ``permission``"""
    try:
        tag = PagePermission(permission.upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown permission: {permission}"
        )
    return PageAccess(permission=tag, allowed=has_page_access(current_user.role, tag))
