"""Error responses for service failures."""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import InvalidArgument, ServiceError, StorageFailure

logger = logging.getLogger(__name__)


async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies get the same 400 {error} shape as missing fields."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    logger.warning(f"[API] Invalid request body on {request.url.path} - {problems}")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {'; '.join(problems)}"},
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    content = {"error": str(exc)}
    if isinstance(exc, StorageFailure) and exc.step:
        content["step"] = exc.step
    return JSONResponse(status_code=500, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"[API] Unhandled error on {request.url.path} - {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors to JSON error bodies."""
    app.add_exception_handler(InvalidArgument, invalid_argument_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
