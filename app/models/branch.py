import uuid
from sqlalchemy import Column, String, Boolean, Integer, Index, Uuid, event, true
from sqlalchemy.orm import validates

from app.core.exceptions import ValidationError
from app.db.base_class import Base
from app.db.mixins import TimestampMixin, clean_text, clean_optional_text


class Branch(TimestampMixin, Base):
    __tablename__ = "branches"

    REQUIRED_FIELDS = ("name", "address")

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String)
    email = Column(String)

    # weak reference to users.id: no FK constraint, no cascade
    manager_id = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (
        Index("ix_branches_name", "name"),
        Index("ix_branches_is_active", "is_active"),
    )

    @validates("name", "address")
    def _validate_required_text(self, key, value):
        value = clean_text(value)
        if not value:
            raise ValidationError(key)
        return value

    @validates("phone")
    def _validate_phone(self, key, value):
        return clean_optional_text(value)

    @validates("email")
    def _validate_email(self, key, value):
        value = clean_optional_text(value)
        return value.lower() if value else value

    def __repr__(self):
        return f"<Branch {self.id} {self.name!r} active={self.is_active}>"


@event.listens_for(Branch, "before_insert")
@event.listens_for(Branch, "before_update")
def _check_required_fields(mapper, connection, target):
    # attribute validators never fire for fields that were not assigned at all
    for field in Branch.REQUIRED_FIELDS:
        if not getattr(target, field):
            raise ValidationError(field)
