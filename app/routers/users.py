"""
ShiftSync - System Users Router
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.dependencies import get_record_store, require_permission
from app.models.user import Permission, SystemUser
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.record_store import RecordStore
from app.services.user_service import UserService


router = APIRouter()

manage_users = require_permission(Permission.MANAGE_USERS)


@router.get("", response_model=List[UserResponse], summary="List users")
async def list_users(
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(manage_users),
):
    return await UserService(store).list_users()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    data: UserCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(manage_users),
):
    return await UserService(store).create_user(
        data.username,
        data.password,
        data.name,
        role=data.role,
        active=data.active,
        permissions=data.permissions,
    )


@router.patch("/{username}", response_model=UserResponse, summary="Update a user")
async def update_user(
    username: str,
    data: UserUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(manage_users),
):
    return await UserService(store).update_user(username, data.model_dump(exclude_unset=True))


@router.delete(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="The Creator account and the default admin are protected.",
)
async def delete_user(
    username: str,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(manage_users),
):
    await UserService(store).delete_user(username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
