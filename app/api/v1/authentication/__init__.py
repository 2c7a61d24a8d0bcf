"""Authentication endpoints package"""

from . import auth

__all__ = [
    "auth",
]
