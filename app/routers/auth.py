"""
ShiftSync - Authentication Router

API endpoints for user authentication.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from app.config import settings
from app.dependencies import get_current_user, get_record_store
from app.models.user import SystemUser
from app.schemas.auth import LoginResponse
from app.schemas.user import UserResponse
from app.services.record_store import RecordStore
from app.services.user_service import UserService
from app.utils.security import create_access_token


router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Exchange username and password (OAuth2 password form) for a Bearer access token.",
)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    store: RecordStore = Depends(get_record_store),
):
    """Authenticate and issue an access token."""
    user = await UserService(store).authenticate(form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        data={"sub": user.username, "role": user.role.value},
        expires_delta=expires,
    )
    return LoginResponse(
        access_token=access_token,
        expires_in=int(expires.total_seconds()),
        user=UserResponse.model_validate(user),
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
)
async def me(current_user: SystemUser = Depends(get_current_user)):
    return current_user
