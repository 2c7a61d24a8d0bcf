from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declared_attr


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """
    Mixin that adds created_at / updated_at to a table.
    Both are filled on insert; updated_at moves on every update.
    Neither is meant to be set by callers.
    """

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


def clean_text(value):
    """Trim a text value; None stays None"""
    if value is None:
        return None
    return str(value).strip()


def clean_optional_text(value):
    """Trim a text value; blank collapses to None"""
    value = clean_text(value)
    return value or None
