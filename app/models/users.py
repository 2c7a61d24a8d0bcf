from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Enum, Uuid
from sqlalchemy.orm import validates
from enum import Enum as PyEnum

from app.core.exceptions import ValidationError
from app.db.base_class import Base
from app.db.mixins import TimestampMixin, clean_text


class UserRole(str, PyEnum):
    ADMIN = "admin"
    USER = "user"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda enum: [e.value for e in enum], native_enum=False),
        nullable=False,
        default=UserRole.USER,
        index=True,
    )
    permissions = Column(JSON, nullable=False, default=list)
    # weak reference to branches.id
    branch_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    last_login = Column(DateTime(timezone=True))

    @validates("email")
    def _validate_email(self, key, value):
        value = clean_text(value)
        if not value:
            raise ValidationError(key)
        return value.lower()

    @validates("name")
    def _validate_name(self, key, value):
        value = clean_text(value)
        if not value:
            raise ValidationError(key)
        return value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
