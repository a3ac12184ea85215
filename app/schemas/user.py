"""
ShiftSync - System User Schemas
"""

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.user import UserRole


class UserCreate(BaseModel):
    """Create a system user; omitted permission flags take the role defaults."""
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.ENGINEER
    active: bool = True
    permissions: Optional[Dict[str, bool]] = None


class UserUpdate(BaseModel):
    password: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[UserRole] = None
    active: Optional[bool] = None
    permissions: Optional[Dict[str, bool]] = None


class UserResponse(BaseModel):
    id: UUID
    username: str
    name: str
    role: UserRole
    active: bool
    permissions: Dict[str, bool]
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True
