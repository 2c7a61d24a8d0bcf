from typing import Any, Mapping, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import logger
from app.schemas.common import ApiResponse

INTERNAL_ERROR_MESSAGE = "Internal server error"
CONFLICT_MESSAGE = "Resource already exists"


def success_response(message: str, data: Any = None) -> dict:
    if data is None:
        return ApiResponse(success=True, message=message).model_dump(exclude_unset=True)
    return ApiResponse(success=True, message=message, data=data).model_dump()


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, message=message).model_dump(exclude_unset=True),
        headers=dict(headers) if headers else None,
    )


def handle_db_exception(
    db: Session,
    e: Exception,
    message: str = "Operation failed",
    conflict_message: str = CONFLICT_MESSAGE,
) -> JSONResponse:
    """
    Roll back the session and turn a failed write into an envelope.

    Unique-constraint violations become 409 with ``conflict_message``,
    everything else a generic 500. Driver details are only logged.
    """
    db.rollback()

    if isinstance(e, IntegrityError):
        logger.warning("%s | INTEGRITY ERROR: %s", message, e.orig)
        return error_response(conflict_message, status.HTTP_409_CONFLICT)

    if isinstance(e, SQLAlchemyError):
        logger.error("%s | DB ERROR: %s", message, e, exc_info=e)
    else:
        logger.error("%s | UNEXPECTED ERROR: %s", message, e, exc_info=e)

    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
