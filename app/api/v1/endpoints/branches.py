"""
app/api/v1/endpoints/branches.py
Branch management endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.exceptions import ValidationError
from app.schemas.auth import UserOut
from app.schemas.branch import BranchCreate, BranchOut, BranchUpdate
from app.services.branch_service import BranchService
from app.utils.auth_helper import require_admin, require_authenticated_user
from app.utils.response_helper import handle_db_exception, success_response

router = APIRouter()

BRANCH_NOT_FOUND = "Branch not found"


@router.get("")
def list_branches(
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
):
    """List active branches, optionally filtered by name or address"""
    try:
        branches = BranchService(db).list_active(search)
        return success_response(
            "Branches retrieved successfully",
            data={"branches": [BranchOut.serialize(b) for b in branches]},
        )
    except Exception as e:
        return handle_db_exception(db, e, "Get branches failed")


@router.post("", status_code=status.HTTP_200_OK)
def create_branch(
    payload: BranchCreate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
):
    try:
        branch = BranchService(db).create_branch(payload)
        return success_response("Branch created successfully", data=BranchOut.serialize(branch))
    except ValidationError:
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Create branch failed")


@router.get("/{branch_id}")
def get_branch(
    branch_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(require_authenticated_user),
):
    try:
        branch = BranchService(db).get_branch(branch_id)
        if not branch:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BRANCH_NOT_FOUND)

        return success_response("Branch retrieved successfully", data=BranchOut.serialize(branch))
    except HTTPException:
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Get branch failed")


@router.put("/{branch_id}")
def update_branch(
    branch_id: str,
    payload: BranchUpdate,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
):
    try:
        branch = BranchService(db).update_branch(branch_id, payload)
        if not branch:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BRANCH_NOT_FOUND)

        return success_response("Branch updated successfully", data=BranchOut.serialize(branch))
    except (HTTPException, ValidationError):
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Update branch failed")


@router.delete("/{branch_id}")
def delete_branch(
    branch_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
):
    try:
        if not BranchService(db).deactivate_branch(branch_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BRANCH_NOT_FOUND)

        return success_response("Branch deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Delete branch failed")


@router.get("/{branch_id}/manager")
def get_branch_manager(
    branch_id: str,
    db: Session = Depends(get_db),
    _: dict = Depends(require_authenticated_user),
):
    service = BranchService(db)
    try:
        branch = service.get_branch(branch_id)
        if not branch:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BRANCH_NOT_FOUND)

        manager = service.get_manager(branch)
        if not manager:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Manager not found")

        return success_response("Manager retrieved successfully", data={"manager": UserOut.serialize(manager)})
    except HTTPException:
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Get branch manager failed")
