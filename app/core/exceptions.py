"""
app/core/exceptions.py
Application error types
"""


class ValidationError(ValueError):
    """Raised when an entity fails field-level validation before a write"""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        self.message = message or f"{field} is required"
        super().__init__(self.message)
