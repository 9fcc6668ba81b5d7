from datetime import UTC, datetime
from typing import Any, Dict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError


class AppError(Exception):
    """Base class for errors classified where the decision is made.

    Handlers only translate ``status_code`` and ``code`` into a response,
    they never re-derive the meaning of the error.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class InternalInconsistencyError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"


def format_validation_error(validation_error: ValidationError | RequestValidationError) -> Dict[str, Any]:
    """Format a pydantic or request ValidationError into a structured response

    Example output:
    {
        "detail": "Validation failed",
        "errors": [
            {
                "field": "status",
                "message": "Value error, Status must be ACCEPTED or REFUSED",
                "type": "value_error",
                "input": "PENDING"
            }
        ],
        "error_count": 1
    }
    """
    errors = []

    for error in validation_error.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])

        # Clean up field names for better readability
        field_display = field_path.replace("body.", "").replace("path.", "")

        error_detail = {
            "field": field_display,
            "message": error["msg"],
            "type": error["type"],
            "input": str(error.get("input", ""))[:100]  # Limit input length
        }

        if error["type"] == "type_error":
            error_detail["message"] = f"Invalid type: {error['msg']}"
        elif error["type"] in ["int_parsing", "float_parsing", "uuid_parsing"]:
            error_detail["message"] = f"Invalid format: {error['msg']}"

        errors.append(error_detail)

    return {
        "detail": "Validation failed",
        "errors": errors,
        "error_count": len(errors)
    }


def format_custom_error(message: str, code: str) -> Dict[str, Any]:
    """Format an error message into the failure envelope

    Example output:
    {
        "success": false,
        "detail": "You are already following this user",
        "error": {
            "code": "CONFLICT",
            "timestamp": "2026-01-01T12:00:00+00:00"
        }
    }
    """
    return {
        "success": False,
        "detail": message,
        "error": {
            "code": code,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=format_custom_error(exc.message, exc.code),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    content = format_custom_error("Validation failed", "BAD_REQUEST")
    content.update(format_validation_error(exc))
    content["success"] = False
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)
