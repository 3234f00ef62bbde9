"""
Utility modules for the LightBnB data layer.
"""

from .exceptions import (
    LightBnBError,
    ValidationError,
    QueryExecutionError,
    ConflictError,
    from_database_error,
)

__all__ = [
    "LightBnBError",
    "ValidationError",
    "QueryExecutionError",
    "ConflictError",
    "from_database_error",
]
