"""
Custom exception classes for the LightBnB data layer.
Callers can tell malformed input, store failures and constraint violations apart.
"""

from sqlalchemy.exc import IntegrityError
from typing import Dict, List, Optional


class LightBnBError(Exception):
    """Base data layer exception."""

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class ValidationError(LightBnBError):
    """Input rejected before any SQL was built."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(detail, error_code="VALIDATION_ERROR")
        self.field_errors = field_errors or []


class QueryExecutionError(LightBnBError):
    """The store failed to execute a statement."""

    def __init__(
        self,
        detail: str,
        cause: Optional[BaseException] = None,
        error_code: str = "QUERY_EXECUTION_ERROR"
    ):
        super().__init__(detail, error_code=error_code)
        self.cause = cause


class ConflictError(QueryExecutionError):
    """A statement violated a store constraint (unique email, foreign key)."""

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(detail, cause=cause, error_code="CONFLICT")


def from_database_error(error: Exception, action: str) -> QueryExecutionError:
    """
    Wrap a driver or SQLAlchemy error raised while executing a statement.

    Args:
        error: The original exception
        action: Short description of what was being done, e.g. "add user"

    Returns:
        ConflictError for integrity violations, QueryExecutionError otherwise
    """
    if isinstance(error, IntegrityError):
        return ConflictError(f"Failed to {action}: constraint violation", cause=error)
    return QueryExecutionError(f"Failed to {action}: {error}", cause=error)
