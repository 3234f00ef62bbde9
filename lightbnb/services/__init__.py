"""
Service layer: the query facade and error handling.
"""

from .error_handler import ErrorHandlerService
from .queries import QueryService

__all__ = [
    "ErrorHandlerService",
    "QueryService"
]
