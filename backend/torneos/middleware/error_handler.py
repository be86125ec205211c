import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from torneos.utils.errors import AppError

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        location = loc[0] if loc else None
        field = ".".join(str(part) for part in loc[1:])
        errors.append({
            "location": location,
            "field": field,
            "message": err.get("msg"),
        })
    return errors


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_content()))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({
            "success": False,
            "message": "Validation errors",
            "errors": _format_validation_errors(exc),
        }),
    )


def register_error_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last resort for exceptions no handler claimed."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except Exception as e:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "message": "An internal error occurred.",
                    "error": str(e),
                },
            )
