"""Pydantic schemas package"""

from .common import ApiResponse
from .auth import LoginRequest, ProfileUpdateRequest, RegisterRequest, UserOut
from .branch import BranchCreate, BranchUpdate, BranchOut

__all__ = [
    "ApiResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "ProfileUpdateRequest",
    "UserOut",
    # Branch
    "BranchCreate",
    "BranchUpdate",
    "BranchOut",
]
