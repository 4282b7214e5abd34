"""
Error Response Factory for the RPS game server

Provides standardized error response creation functionality.
"""

import logging
import traceback
from typing import Dict, Optional

from flask_socketio import emit

from rps.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class ErrorResponseFactory:
    """Factory responsible for creating standardized error responses."""

    def create_error_response(self, code: ErrorCode, message: str, details: Optional[Dict] = None) -> Dict:
        """
        Create standardized error response.

        Args:
            code: Error code enum
            message: Human-readable error message
            details: Optional additional error details

        Returns:
            Standardized error response
        """
        return {
            "success": False,
            "error": {
                "code": code.value,
                "message": message,
                "details": details or {}
            }
        }

    def emit_error(self, code: ErrorCode, message: str, details: Optional[Dict] = None):
        """
        Emit standardized error response to the requesting client only.

        Args:
            code: Error code enum
            message: Human-readable error message
            details: Optional additional error details
        """
        error_response = self.create_error_response(code, message, details)

        logger.warning(f"Emitting error: {code.value} - {message}")
        emit('error', error_response)

    def emit_validation_error(self, error: ValidationError):
        """Emit validation error response to client."""
        self.emit_error(error.code, error.message, error.details)

    def handle_exception(self, e: Exception, context: str = "Unknown") -> tuple[ErrorCode, str]:
        """
        Handle unexpected exceptions and return appropriate error code and message.

        Args:
            e: Exception instance
            context: Context where the exception occurred

        Returns:
            Tuple of (error_code, error_message)
        """
        if isinstance(e, ValidationError):
            return e.code, e.message

        logger.error(f"Unexpected exception in {context}: {str(e)}")
        logger.error(f"Exception traceback: {traceback.format_exc()}")

        return ErrorCode.INTERNAL_ERROR, "An internal error occurred"
