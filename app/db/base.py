"""
app/db/base.py
Import all models here for Alembic to detect them
"""
from app.db.base_class import Base

# Import all models here so Alembic can detect them
from app.models.branch import Branch
from app.models.users import User
