import logging

from fastapi import status
from fastapi.responses import JSONResponse

from app.application.exceptions import NotFoundError, QueueServiceError, StoreError, ValidationError


logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[QueueServiceError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(exc: QueueServiceError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.exception("Store failure", extra={"reason": exc.reason})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Service temporarily unavailable", "reason": exc.reason},
        )
    code = _STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=code, content={"error": str(exc), "reason": exc.reason})
