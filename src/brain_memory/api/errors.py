"""Map application errors to HTTP responses carrying the structured failure payload."""

import pydantic
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from brain_memory.core.base import ApplicationError, ErrorCode
from brain_memory.core.handlers import ErrorHandler, validation_error_from_errors

STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DB_VALIDATION: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_CONNECTION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.EMBEDDING_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.NOT_FOUND: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def install_error_handlers(app: FastAPI, handler: ErrorHandler | None = None) -> None:
    handler = handler or ErrorHandler()

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = validation_error_from_errors(exc.errors(), request.url.path)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=handler.handle(error, request.url.path))

    @app.exception_handler(ApplicationError)
    async def handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
        code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(status_code=code, content=handler.handle(exc, request.url.path))

    @app.exception_handler(pydantic.ValidationError)
    async def handle_model_validation(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
        error = validation_error_from_errors(exc.errors(), request.url.path)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=handler.handle(error, request.url.path))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=handler.handle(exc, request.url.path),
        )
