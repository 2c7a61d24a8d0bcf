from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# Request bodies accept both the camelCase wire names and the python names.
# name/address stay optional here so the model layer owns the "required" rule.

class BranchCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    manager_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("manager", "manager_id")
    )
    is_active: bool = Field(
        default=True, validation_alias=AliasChoices("isActive", "is_active")
    )


class BranchUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    manager_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("manager", "manager_id")
    )
    is_active: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("isActive", "is_active")
    )


class BranchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    manager_id: Optional[int] = Field(default=None, serialization_alias="manager")
    is_active: bool = Field(serialization_alias="isActive")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def serialize(cls, branch) -> dict:
        return cls.model_validate(branch).model_dump(mode="json", by_alias=True)
