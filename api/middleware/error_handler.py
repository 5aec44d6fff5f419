"""
Global Error Handler Middleware
================================

Maps custom exceptions to HTTP status codes and formats error responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from exceptions import (
    ConsultScribeError,
    ConsultationNotFoundError,
    InvalidStatusTransitionError,
    EmptyTranscriptError,
    MissingPrescriptionError,
    ConfigurationError,
)
from config import get_settings


# Set up module logger
logger = logging.getLogger(__name__)

# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP = {
    ConsultationNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
    EmptyTranscriptError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MissingPrescriptionError: status.HTTP_400_BAD_REQUEST,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def error_handler_middleware(request: Request, call_next):
    """
    Global error handling middleware.

    Catches ConsultScribe exceptions and converts them to appropriate
    HTTP responses with structured error bodies.

    Args:
        request: The incoming request
        call_next: The next middleware/route handler

    Returns:
        Response or JSONResponse with error details
    """
    try:
        response = await call_next(request)
        return response
    except ConsultScribeError as e:
        status_code = EXCEPTION_STATUS_MAP.get(
            type(e),
            status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {e.message}")
        return JSONResponse(
            status_code=status_code,
            content=e.to_dict()
        )
    except Exception as e:
        # Unexpected errors - hide details in production
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        settings = get_settings()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error_type": "InternalServerError",
                "message": "An unexpected error occurred",
                "details": {"error": str(e)} if settings.api_debug else {}
            }
        )
