"""Database models package"""
from .users import User, UserRole
from .branch import Branch

__all__ = [
    "User",
    "UserRole",
    "Branch",
]
