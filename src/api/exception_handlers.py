"""Application-wide exception handlers.

Route handlers map expected domain errors (409, 401) themselves; what lands
here is malformed input and infrastructure failure.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.model.errors import HashingError, StoreError

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or invalid request body -> 400."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"][1:]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Malformed request body", "errors": errors}),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Store/hashing failures -> generic 500; detail goes to the log only."""
    logger.error(
        "Request failed",
        exc_info=exc,
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StoreError, internal_error_handler)
    app.add_exception_handler(HashingError, internal_error_handler)
