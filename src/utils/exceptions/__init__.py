from .exceptions import (
    AppError,
    InvalidRequestError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    InternalInconsistencyError,
    format_validation_error,
    format_custom_error,
    app_error_handler,
    validation_error_handler,
)

__all__ = [
    'AppError',
    'InvalidRequestError',
    'NotFoundError',
    'ForbiddenError',
    'ConflictError',
    'InternalInconsistencyError',
    'format_validation_error',
    'format_custom_error',
    'app_error_handler',
    'validation_error_handler',
]
