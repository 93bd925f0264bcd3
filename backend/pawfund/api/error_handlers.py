"""Module: error_handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pawfund.core.errors import ErrorKind, PawFundError

logger = logging.getLogger(__name__)

# Failure kind -> HTTP status. The core never picks status codes itself.
STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(PawFundError)
    async def pawfund_error_handler(request: Request, exc: PawFundError):
        code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if code >= 500:
            logger.error("%s on %s: %s", exc.kind.value, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", exc.kind.value, request.url.path, exc.message)
        return JSONResponse(
            status_code=code,
            content={"detail": exc.message, "kind": exc.kind.value},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Request validation failed",
                "kind": ErrorKind.INVALID_ARGUMENT.value,
                "errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                    for err in exc.errors()
                ],
            },
        )
