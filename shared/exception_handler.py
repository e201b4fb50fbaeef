import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from shared.core.exceptions import AppError
from shared.helpers.json_response_helper import error_payload
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

HTTP_STATUS_KINDS = {
    401: AppStatusCode.UNAUTHORIZED,
    403: AppStatusCode.UNAUTHORIZED,
    404: AppStatusCode.NOT_FOUND,
    409: AppStatusCode.CONFLICT,
}


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return ", ".join(messages) or "Validation failed"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.info("%s %s -> %s: %s", request.method,
                    request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            content=error_payload(exc.message, exc.status_code),
            status_code=exc.http_status
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        kind = HTTP_STATUS_KINDS.get(exc.status_code, AppStatusCode.OPERATION_FAILED)
        return JSONResponse(
            content=error_payload(str(exc.detail), kind),
            status_code=exc.status_code or 400,
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content=error_payload(_format_validation_errors(exc),
                                  AppStatusCode.VALIDATION_ERROR),
            status_code=422
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return JSONResponse(
            content=error_payload("Server Error", AppStatusCode.OPERATION_FAILED),
            status_code=500
        )
