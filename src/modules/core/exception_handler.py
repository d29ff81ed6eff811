"""DRF exception handler translating failures into JSON error responses.

Every error body has the same shape::

    {"status": 404, "error": "Resource Not Found",
     "message": "Product not found with id: 7", "path": "/api/products/7"}

Validation failures add an ``errors`` mapping of field -> message.
Unclassified exceptions are logged with their traceback and answered with a
generic 500; they are never silently dropped.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import InvalidArgument, ResourceNotFound

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."

_FORWARDED_HEADERS = ("Allow", "WWW-Authenticate", "Retry-After")


def _path(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else ""


def _error_response(
    status_code: int,
    error: str,
    message: str,
    context: Dict[str, Any],
    errors: Optional[Dict[str, str]] = None,
) -> Response:
    body: Dict[str, Any] = {
        "status": status_code,
        "error": error,
        "message": message,
        "path": _path(context),
    }
    if errors is not None:
        body["errors"] = errors
    return Response(body, status=status_code)


def pydantic_field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten a Pydantic ``ValidationError`` into ``{field: message}``."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "non_field_errors"
        if err["type"] == "value_error":
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.setdefault(field, message)
    return errors


def _django_field_errors(exc: DjangoValidationError) -> Dict[str, str]:
    if hasattr(exc, "error_dict"):
        return {
            ("non_field_errors" if field == "__all__" else field): messages[0]
            for field, messages in exc.message_dict.items()
        }
    return {"non_field_errors": exc.messages[0]}


def _drf_field_errors(detail: Any) -> Dict[str, str]:
    if isinstance(detail, dict):
        return {
            str(field): str(messages[0] if isinstance(messages, list) else messages)
            for field, messages in detail.items()
        }
    if isinstance(detail, list) and detail:
        return {"non_field_errors": str(detail[0])}
    return {"non_field_errors": str(detail)}


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Entry point registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``."""
    if isinstance(exc, ResourceNotFound):
        logger.info("api.resource_not_found", detail=str(exc))
        return _error_response(
            status.HTTP_404_NOT_FOUND, "Resource Not Found", str(exc), context
        )

    if isinstance(exc, InvalidArgument):
        logger.info("api.invalid_argument", detail=str(exc))
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Bad Request", str(exc), context
        )

    if isinstance(exc, PydanticValidationError):
        errors = pydantic_field_errors(exc)
        logger.info("api.validation_failed", errors=errors)
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Invalid input data.",
            context,
            errors=errors,
        )

    if isinstance(exc, DjangoValidationError):
        errors = _django_field_errors(exc)
        logger.info("api.validation_failed", errors=errors)
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Invalid input data.",
            context,
            errors=errors,
        )

    if isinstance(exc, DRFValidationError):
        errors = _drf_field_errors(exc.detail)
        logger.info("api.validation_failed", errors=errors)
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Invalid input data.",
            context,
            errors=errors,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = response.data
        if isinstance(detail, dict):
            detail = detail.get("detail", "")
        error_response = _error_response(
            response.status_code,
            response.status_text,
            str(detail),
            context,
        )
        for header in _FORWARDED_HEADERS:
            if header in response:
                error_response[header] = response[header]
        return error_response

    logger.exception(
        "api.unhandled_exception", error_type=type(exc).__name__, exc_info=exc
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        GENERIC_ERROR_MESSAGE,
        context,
    )
