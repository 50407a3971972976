from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from staffdesk.core.errors import InternalError, StaffDeskError, ValidationError
from staffdesk.core.logging import get_logger

logger = get_logger(__name__)


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = str(error.get("msg"))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def handle_staffdesk_error(request: Request, exc: StaffDeskError) -> JSONResponse:
    if exc.status_code >= 500:
        # Storage failures keep their cause; the client only sees the generic message.
        logger.error("request_failed", path=request.url.path, error=repr(exc.__cause__ or exc))
        body = InternalError().to_body()
    else:
        logger.info("request_rejected", path=request.url.path, code=exc.code, detail=exc.message)
        body = exc.to_body()
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=int(exc.status_code), content=body, headers=headers)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_request_errors(exc)
    logger.info("request_rejected", path=request.url.path, code=ValidationError.code, detail=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=ValidationError(message).to_body())


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=InternalError().to_body())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StaffDeskError, handle_staffdesk_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
