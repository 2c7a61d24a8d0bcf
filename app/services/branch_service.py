"""
app/services/branch_service.py
Business logic for branch management
"""
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.logging import logger
from app.models.branch import Branch
from app.models.users import User
from app.schemas.branch import BranchCreate, BranchUpdate


def parse_branch_id(branch_id: Union[str, UUID, None]) -> Optional[UUID]:
    """Parse a branch id from a path segment; malformed ids yield None"""
    if isinstance(branch_id, UUID):
        return branch_id
    try:
        return UUID(str(branch_id))
    except (TypeError, ValueError):
        return None


class BranchService:
    """Service class for branch operations"""

    def __init__(self, db: Session):
        self.db = db

    def list_active(self, search: Optional[str] = None) -> List[Branch]:
        """Active branches sorted by name, optionally filtered by name/address"""
        query = self.db.query(Branch).filter(Branch.is_active.is_(True))

        search = (search or "").strip()
        if search:
            query = query.filter(
                Branch.name.icontains(search, autoescape=True)
                | Branch.address.icontains(search, autoescape=True)
            )

        return query.order_by(Branch.name.asc()).all()

    def get_branch(self, branch_id) -> Optional[Branch]:
        """Get a branch by id, active or not"""
        parsed = parse_branch_id(branch_id)
        if parsed is None:
            return None
        return self.db.get(Branch, parsed)

    def create_branch(self, payload: BranchCreate) -> Branch:
        try:
            branch = Branch(**payload.model_dump())
            self.db.add(branch)
            self.db.commit()
        except ValidationError:
            self.db.rollback()
            raise

        self.db.refresh(branch)
        logger.info("Created branch %s (%s)", branch.id, branch.name)
        return branch

    def update_branch(self, branch_id, payload: BranchUpdate) -> Optional[Branch]:
        """Partial update: only fields present in the payload change"""
        branch = self.get_branch(branch_id)
        if not branch:
            return None

        update_data = payload.model_dump(exclude_unset=True)
        if update_data.get("is_active") is None:
            update_data.pop("is_active", None)

        try:
            for field, value in update_data.items():
                setattr(branch, field, value)
            self.db.commit()
        except ValidationError:
            self.db.rollback()
            raise

        self.db.refresh(branch)
        logger.info("Updated branch %s fields=%s", branch.id, sorted(update_data))
        return branch

    def deactivate_branch(self, branch_id) -> bool:
        """Soft delete: branches are never removed, only marked inactive"""
        branch = self.get_branch(branch_id)
        if not branch:
            return False

        branch.is_active = False
        self.db.commit()

        logger.info("Deactivated branch %s", branch.id)
        return True

    def get_manager(self, branch: Branch) -> Optional[User]:
        """Resolve the weak manager reference; a dangling id resolves to None"""
        if branch.manager_id is None:
            return None
        return self.db.get(User, branch.manager_id)
