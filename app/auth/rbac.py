from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.schemas import CurrentUser
from app.core.enums import UserRole


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require the admin role. Every mutating endpoint uses this."""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only school administrators can perform this action",
        )
    return current_user


async def require_viewer(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Admins and shareholders may read."""
    if current_user.role not in (UserRole.ADMIN, UserRole.SHAREHOLDER):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user
