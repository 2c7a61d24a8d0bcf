from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.models.users import UserRole


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[UserRole] = None
    permissions: Optional[List[str]] = None
    branch_id: Optional[UUID] = Field(
        default=None,
        validation_alias=AliasChoices("branch", "branch_id"),
    )


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    current_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("currentPassword", "current_password"),
    )
    new_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("newPassword", "new_password"),
    )


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole
    permissions: List[str] = Field(default_factory=list)
    branch_id: Optional[UUID] = Field(default=None, serialization_alias="branch")
    is_active: bool = Field(serialization_alias="isActive")
    last_login: Optional[datetime] = Field(default=None, serialization_alias="lastLogin")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def serialize(cls, user) -> dict:
        return cls.model_validate(user).model_dump(mode="json", by_alias=True)
