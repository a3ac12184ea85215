"""
ShiftSync - FastAPI Dependencies

Shared dependencies for the record store, current user authentication and
permission checks.
"""

from typing import AsyncIterator, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.models.user import Permission, SystemUser
from app.services.record_store import RecordStore
from app.utils.error_handling import (
    AuthenticationException,
    AuthorizationException,
    ErrorCode,
    InsufficientPermissionsException,
)
from app.utils.security import verify_access_token


# HTTP Bearer token security
security = HTTPBearer(auto_error=False)


async def get_record_store(
    db: AsyncSession = Depends(get_async_session),
) -> AsyncIterator[RecordStore]:
    """One record store per request, over the request's session."""
    yield RecordStore(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: RecordStore = Depends(get_record_store),
) -> SystemUser:
    """
    Get the current authenticated user from the Bearer JWT.

    Raises:
        AuthenticationException: If the token is missing or invalid, or the
            user is unknown
        AuthorizationException: If the user is deactivated
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationException("Invalid or expired token", code=ErrorCode.TOKEN_INVALID)

    username = payload.get("sub")
    if not username:
        raise AuthenticationException("Invalid token payload", code=ErrorCode.TOKEN_INVALID)

    user = await store.get_user(username)
    if not user:
        raise AuthenticationException("User not found")

    if not user.active:
        raise AuthorizationException("User account is deactivated", code=ErrorCode.ACCOUNT_DISABLED)

    return user


def require_permission(permission: Permission):
    """
    Dependency factory for permission-flag access control.

    Creator and Admin pass every check.

    Usage:
        @router.get("/payroll/summary")
        async def summary(user: SystemUser = Depends(require_permission(Permission.VIEW_PAYROLL))):
            ...
    """
    async def permission_checker(
        current_user: SystemUser = Depends(get_current_user),
    ) -> SystemUser:
        if not current_user.has_permission(permission):
            raise InsufficientPermissionsException(permission.value)
        return current_user

    return permission_checker
