"""Maps domain errors onto HTTP responses."""

import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from events.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_PUBLISHED: status.HTTP_409_CONFLICT,
    ErrorCode.EVENT_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_REGISTRATION: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
}


def error_body(code: str, message: str, details: list[dict] | None = None) -> dict:
    return {
        "error": {"code": code, "message": message, "details": details or []},
        "trace_id": f"trace-{uuid.uuid4().hex}",
    }


def domain_error_response(exc: DomainError) -> Response:
    details = [{"field": item.field, "issue": item.issue} for item in exc.details]
    return Response(
        error_body(exc.code.value, exc.message, details),
        status=STATUS_BY_CODE[exc.code],
    )


def events_exception_handler(exc: Exception, context: dict) -> Response | None:
    """DRF exception handler that understands DomainError.

    Anything else falls through to DRF's default handling.
    """
    if isinstance(exc, DomainError):
        return domain_error_response(exc)
    response = exception_handler(exc, context)
    if response is not None and isinstance(response.data, dict) and "detail" in response.data:
        code = getattr(exc, "default_code", "error")
        response.data = error_body(code, str(response.data["detail"]))
    return response
