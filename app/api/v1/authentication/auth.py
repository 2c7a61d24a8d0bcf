from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.exceptions import ValidationError
from app.core.logging import logger
from app.db.mixins import utcnow
from app.models import User, UserRole
from app.schemas.auth import LoginRequest, ProfileUpdateRequest, RegisterRequest, UserOut
from app.utils.auth_helper import (
    build_token_claims,
    clear_auth_cookie,
    create_access_token,
    get_current_user,
    has_role,
    hash_password,
    require_authenticated_user,
    set_auth_cookie,
    verify_password,
)
from app.utils.response_helper import (
    INTERNAL_ERROR_MESSAGE,
    error_response,
    handle_db_exception,
    success_response,
)

router = APIRouter()

USER_EXISTS = "User already exists with this email"


@router.post("/register", status_code=status.HTTP_200_OK)
def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    email = (payload.email or "").strip().lower()
    password = payload.password or ""
    name = (payload.name or "").strip()

    if not email or not password or not name:
        return error_response("Email, password, and name are required", status.HTTP_400_BAD_REQUEST)

    try:
        if db.query(User).filter(User.email == email).first():
            return error_response(USER_EXISTS, status.HTTP_409_CONFLICT)

        caller = get_current_user(request)

        # the first account bootstraps an empty deployment as admin,
        # afterwards only an admin can grant a role, permissions or a branch
        if db.query(User.id).first() is None:
            role, permissions, branch_id = UserRole.ADMIN, [], None
        elif has_role(caller, UserRole.ADMIN.value):
            role = payload.role or UserRole.USER
            permissions = payload.permissions or []
            branch_id = payload.branch_id
        else:
            role, permissions, branch_id = UserRole.USER, [], None

        user = User(
            email=email,
            hashed_password=hash_password(password),
            name=name,
            role=role,
            permissions=permissions,
            branch_id=branch_id,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        token = create_access_token(build_token_claims(user))
        # an admin creating an account keeps their own session
        if not caller:
            set_auth_cookie(response, token)

        logger.info("User %s registered with role %s", user.id, UserRole(user.role).value)
        return success_response(
            "Registration successful",
            data={"user": UserOut.serialize(user), "token": token},
        )
    except Exception as e:
        return handle_db_exception(db, e, "Registration failed", conflict_message=USER_EXISTS)


@router.post("/login", status_code=status.HTTP_200_OK)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    email = (payload.email or "").strip().lower()
    password = payload.password or ""

    if not email or not password:
        return error_response("Email and password are required", status.HTTP_400_BAD_REQUEST)

    try:
        user = db.query(User).filter(User.email == email).first()

        if not user:
            return error_response("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

        if not user.is_active:
            return error_response("Account is deactivated", status.HTTP_401_UNAUTHORIZED)

        if not verify_password(password, user.hashed_password):
            logger.warning("Failed login for user %s", user.id)
            return error_response("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

        user.last_login = utcnow()
        db.commit()
        db.refresh(user)

        token = create_access_token(build_token_claims(user))
        set_auth_cookie(response, token)

        logger.info("User %s logged in", user.id)
        return success_response(
            "Login successful",
            data={"user": UserOut.serialize(user), "token": token},
        )
    except Exception as e:
        return handle_db_exception(db, e, "Login failed")


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(response: Response):
    # logging out without a (valid) session is a no-op, never an error
    try:
        clear_auth_cookie(response)
        return success_response("Logout successful")
    except Exception:
        logger.exception("Logout error")
        return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/me", status_code=status.HTTP_200_OK)
def me(
    current_user: dict = Depends(require_authenticated_user),
    db: Session = Depends(get_db),
):
    try:
        user = db.get(User, int(current_user["sub"]))
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        return success_response("User retrieved successfully", data={"user": UserOut.serialize(user)})
    except HTTPException:
        raise
    except (SQLAlchemyError, ValueError) as e:
        return handle_db_exception(db, e, "Get user failed")


@router.put("/profile", status_code=status.HTTP_200_OK)
def update_profile(
    payload: ProfileUpdateRequest,
    current_user: dict = Depends(require_authenticated_user),
    db: Session = Depends(get_db),
):
    """Update name and email, and the password when the current one is confirmed"""
    try:
        user = db.get(User, int(current_user["sub"]))
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        if payload.new_password:
            if not payload.current_password or not verify_password(payload.current_password, user.hashed_password):
                return error_response("Current password is incorrect", status.HTTP_400_BAD_REQUEST)

        if payload.email is not None:
            email = payload.email.strip().lower()
            taken = db.query(User.id).filter(User.email == email, User.id != user.id).first()
            if email and taken:
                return error_response(USER_EXISTS, status.HTTP_409_CONFLICT)
            user.email = email

        if payload.name is not None:
            user.name = payload.name

        if payload.new_password:
            user.hashed_password = hash_password(payload.new_password)

        db.commit()
        db.refresh(user)

        logger.info("User %s updated their profile", user.id)
        return success_response("Profile updated successfully", data={"user": UserOut.serialize(user)})
    except HTTPException:
        raise
    except ValidationError:
        db.rollback()
        raise
    except Exception as e:
        return handle_db_exception(db, e, "Update profile failed", conflict_message=USER_EXISTS)
