"""
ShiftSync - System User Service

User accounts, password authentication and startup seeding of the default
admin (and the optional Creator account).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from app.config import settings
from app.models.user import Permission, SystemUser, UserRole, all_permissions
from app.services.record_store import RecordStore
from app.utils.error_handling import (
    BusinessRuleException,
    DuplicateEntryException,
    ErrorCode,
    UserNotFoundException,
    parse_choice,
    require_text,
)
from app.utils.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

# Default permission flags per role; Creator and Admin bypass flags entirely
ROLE_DEFAULT_PERMISSIONS: Dict[UserRole, List[Permission]] = {
    UserRole.HR: [
        Permission.VIEW_DASHBOARD,
        Permission.MANAGE_EMPLOYEES,
        Permission.VIEW_DIRECTORY,
        Permission.VIEW_TIMESHEET,
        Permission.MANAGE_LEAVES,
        Permission.VIEW_PAYROLL,
        Permission.VIEW_REPORTS,
    ],
    UserRole.SUPERVISOR: [
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_DIRECTORY,
        Permission.MANAGE_ATTENDANCE,
        Permission.VIEW_TIMESHEET,
        Permission.MANAGE_LEAVES,
    ],
    UserRole.ENGINEER: [
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_TIMESHEET,
    ],
}


def default_permissions(role: UserRole) -> Dict[str, bool]:
    role = UserRole(role)
    if role in (UserRole.CREATOR, UserRole.ADMIN):
        return all_permissions(True)
    granted = {permission.value for permission in ROLE_DEFAULT_PERMISSIONS.get(role, [])}
    return {permission.value: permission.value in granted for permission in Permission}


def _merge_permissions(base: Dict[str, bool], overrides: Optional[Mapping[str, Any]]) -> Dict[str, bool]:
    merged = dict(base)
    for key, value in (overrides or {}).items():
        merged[parse_choice(Permission, key, "permissions").value] = bool(value)
    return merged


class UserService:
    """System users."""

    def __init__(self, store: RecordStore):
        self.store = store

    def is_protected(self, user: SystemUser) -> bool:
        """The Creator account and the configured default admin cannot be deleted."""
        return (
            UserRole(user.role) == UserRole.CREATOR
            or user.username == settings.default_admin_username
        )

    async def get_user(self, username: str) -> SystemUser:
        user = await self.store.get_user(username)
        if not user:
            raise UserNotFoundException(username)
        return user

    async def list_users(self) -> List[SystemUser]:
        return await self.store.list_users()

    async def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: UserRole = UserRole.ENGINEER,
        active: bool = True,
        permissions: Optional[Mapping[str, Any]] = None,
    ) -> SystemUser:
        """
        Create a user with a bcrypt-hashed password.

        Raises:
            DuplicateEntryException: If the username is taken
        """
        username = require_text(username, "username")
        password = require_text(password, "password")
        name = require_text(name, "name")
        if await self.store.get_user(username):
            raise DuplicateEntryException("User", "username", username)

        role = parse_choice(UserRole, role, "role")
        user = await self.store.put(SystemUser(
            username=username,
            hashed_password=get_password_hash(password),
            name=name,
            role=role,
            active=active,
            permissions=_merge_permissions(default_permissions(role), permissions),
        ))
        await self.store.commit()
        logger.info(f"System user {username} created with role {role.value}")
        return user

    async def update_user(self, username: str, data: Mapping[str, Any]) -> SystemUser:
        """Update name, role, active flag, permissions or password."""
        user = await self.get_user(username)

        if data.get("name") is not None:
            user.name = require_text(data["name"], "name")
        if data.get("role") is not None:
            user.role = parse_choice(UserRole, data["role"], "role")
        if data.get("active") is not None:
            user.active = bool(data["active"])
        if data.get("permissions") is not None:
            user.permissions = _merge_permissions(user.permissions or {}, data["permissions"])
        if data.get("password"):
            user.hashed_password = get_password_hash(data["password"])

        await self.store.put(user)
        await self.store.commit()
        return user

    async def delete_user(self, username: str) -> None:
        user = await self.get_user(username)
        if self.is_protected(user):
            raise BusinessRuleException(
                f"User '{username}' is protected and cannot be deleted",
                rule="protected_user",
                code=ErrorCode.CANNOT_DELETE,
            )
        await self.store.delete(user)
        await self.store.commit()
        logger.info(f"System user {username} deleted")

    async def authenticate(self, username: str, password: str) -> Optional[SystemUser]:
        """The active user matching the credentials, or None."""
        user = await self.store.get_user(username)
        if not user or not user.active:
            return None
        if not verify_password(password, user.hashed_password):
            return None

        user.last_login_at = datetime.now(timezone.utc)
        await self.store.put(user)
        await self.store.commit()
        return user

    async def seed_default_users(self) -> int:
        """Create the default admin and, when configured, the Creator."""
        created = 0
        if not await self.store.get_user(settings.default_admin_username):
            await self.create_user(
                settings.default_admin_username,
                settings.default_admin_password,
                settings.default_admin_name,
                role=UserRole.ADMIN,
            )
            created += 1

        if settings.creator_username and settings.creator_password:
            if not await self.store.get_user(settings.creator_username):
                await self.create_user(
                    settings.creator_username,
                    settings.creator_password,
                    settings.creator_name,
                    role=UserRole.CREATOR,
                )
                created += 1
        return created
