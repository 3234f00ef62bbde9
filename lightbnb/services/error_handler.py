"""
Error handling service for consistent error conversion and formatting.
Turns pydantic failures into ValidationError and formats data layer errors
as plain dicts for the calling web layer.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from lightbnb.utils.exceptions import LightBnBError, ValidationError, ConflictError
import logging

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the data layer.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Error code identifier
            message: Human-readable error message
            details: Optional list of detailed error information

        Returns:
            Formatted error response dictionary
        """
        response = {
            "error": {
                "code": error_code,
                "message": message,
                "timestamp": ErrorHandlerService._get_current_timestamp(),
            }
        }

        if details:
            response["error"]["details"] = details

        return response

    @staticmethod
    def handle_validation_error(
        exception: PydanticValidationError,
        subject: str = "Input"
    ) -> ValidationError:
        """
        Convert a Pydantic validation error into a ValidationError with field details.

        Args:
            exception: Pydantic validation error
            subject: What was being validated, used in the message

        Returns:
            ValidationError instance to raise
        """
        validation_details = []
        for error in exception.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "__root__"
            validation_details.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"]
            })

        logger.warning(f"Validation Error: {subject} has {len(validation_details)} field errors")

        return ValidationError(
            detail=f"{subject} validation failed",
            field_errors=validation_details
        )

    @staticmethod
    def to_error_response(exception: LightBnBError) -> Dict[str, Any]:
        """
        Format a data layer exception as an error response dictionary.

        Args:
            exception: Any LightBnBError

        Returns:
            Formatted error response dictionary
        """
        details = None
        message = exception.detail

        if isinstance(exception, ValidationError):
            details = exception.field_errors
        elif isinstance(exception, ConflictError) and isinstance(exception.cause, IntegrityError):
            constraint_info = ErrorHandlerService._extract_constraint_info(exception.cause)
            if constraint_info:
                message = f"Constraint violation: {constraint_info}"

        return ErrorHandlerService.format_error_response(
            error_code=exception.error_code or "LIGHTBNB_ERROR",
            message=message,
            details=details
        )

    @staticmethod
    def _get_current_timestamp() -> str:
        """Get current timestamp in ISO format."""
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """
        Extract constraint information from integrity error.

        Args:
            exception: SQLAlchemy integrity error

        Returns:
            Constraint information string or None
        """
        error_msg = str(exception.orig).lower()

        # Common constraint patterns (PostgreSQL and SQLite wording)
        if "unique constraint" in error_msg:
            return "Duplicate value for unique field"
        elif "foreign key constraint" in error_msg:
            return "Referenced record does not exist"
        elif "not null constraint" in error_msg:
            return "Required field cannot be empty"
        elif "check constraint" in error_msg:
            return "Value does not meet validation requirements"

        return None
