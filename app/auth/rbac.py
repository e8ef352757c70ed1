from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.schemas import CurrentUser, SchoolContext
from app.auth.services import school_context
from app.core.exceptions import ServiceError


async def get_school_context(
    school_id: str,
    current_user: CurrentUser = Depends(get_current_user),
) -> SchoolContext:
    """School from the path; access checked against the caller's role."""
    try:
        return school_context(current_user, school_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


async def get_own_school_context(
    current_user: CurrentUser = Depends(get_current_user),
) -> SchoolContext:
    """School assigned to the caller (school admins and teachers)."""
    try:
        return school_context(current_user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


async def require_editable_school(
    context: SchoolContext = Depends(get_school_context),
) -> SchoolContext:
    """Dependency for write endpoints: teachers only get read access."""
    if not context.can_edit:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Read-only access to this school",
        )
    return context
