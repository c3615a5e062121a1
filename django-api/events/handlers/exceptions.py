"""DRF exception handler giving every error the API's ``{message, error}`` shape."""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from events.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SLUG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_REFERENCE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.IMAGE_UPLOAD_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def exception_handler(exc, context):
    """Format errors that escape a view.

    DRF's own exceptions keep their status code. Domain errors are mapped by
    code and anything else becomes a 500 carrying the exception message.
    """
    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {
            "message": str(detail) if detail else "Request failed",
            "error": getattr(exc, "default_code", type(exc).__name__),
        }
        return response

    if isinstance(exc, DomainError):
        return Response(
            {"message": exc.message, "error": exc.code.value},
            status=STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        )

    view = context.get("view")
    logger.exception(f"Unhandled error in {type(view).__name__}: {exc}")
    return Response(
        {"message": "Internal server error", "error": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
