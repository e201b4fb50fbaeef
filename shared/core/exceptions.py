from fastapi import status

from shared.utils.app_status_code import AppStatusCode


class AppError(Exception):
    """Base for every failure the domain services surface to callers.

    ``status_code`` is the stable machine-readable kind, ``http_status`` the
    transport status a router should answer with.
    """

    status_code: str = AppStatusCode.OPERATION_FAILED
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = AppStatusCode.VALIDATION_ERROR
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class NotFoundError(AppError):
    status_code = AppStatusCode.NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = AppStatusCode.CONFLICT
    http_status = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UnauthorizedError(AppError):
    status_code = AppStatusCode.UNAUTHORIZED
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class InvalidArgumentError(AppError):
    status_code = AppStatusCode.INVALID_ARGUMENT
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid argument"
