"""
Error handling utilities
"""

from typing import Optional
import httpx
from src.models.response import ErrorResponse
from src.utils.logger import logger


class DashboardError(Exception):
    """Base exception for dashboard errors"""
    pass


class APIError(DashboardError):
    """Task API answered with an error status"""
    def __init__(self, message: str = "", status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"HTTP {status_code}")


class ValidationError(DashboardError):
    """Payload does not have the shape the dashboard needs"""
    pass


def server_message(response: httpx.Response) -> str:
    """
    Reason reported in an error response body

    Args:
        response: Error response

    Returns:
        The body's ``message`` field, or "" when there is none
    """
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""


def extract_error_message(error: Exception, fallback: str) -> str:
    """
    Turn a failed HTTP call into a single human-readable message

    Transport failures, 4xx and 5xx are not distinguished: the server's
    reported reason is used when there is one, otherwise the fallback.

    Args:
        error: Exception raised by the HTTP call
        fallback: Per-operation message used when the server gives none

    Returns:
        Error message
    """
    if isinstance(error, APIError):
        return error.message or fallback

    if isinstance(error, httpx.HTTPStatusError):
        return server_message(error.response) or fallback

    return fallback


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    logger.error(f"Error occurred: {error}", exc_info=True)

    if isinstance(error, APIError):
        return ErrorResponse(
            message=error.message or "The task service rejected the request.",
            status_code=error.status_code,
        )

    if isinstance(error, ValidationError):
        return ErrorResponse(
            message=f"Validation error: {str(error)}",
        )

    if isinstance(error, httpx.HTTPStatusError):
        return ErrorResponse(
            message=extract_error_message(error, "The task service rejected the request."),
            status_code=error.response.status_code,
        )

    if isinstance(error, httpx.RequestError):
        return ErrorResponse(
            message="The task service is unreachable. Please try again later.",
        )

    # Generic error message
    return ErrorResponse(
        message="Something went wrong. Please try again later.",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user

    Args:
        error: Exception to format

    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message
