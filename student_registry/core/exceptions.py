from typing import Any, Dict, Optional
from fastapi import status

class BaseAPIException(Exception):
    """
    Base class for every custom error raised by the service.
    Keeps the error body returned to clients in one format.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class DatabaseConnectionError(BaseAPIException):
    """
    503: the database could not be reached.

    Rendered as a single plain text line instead of the usual JSON body,
    the page is abandoned entirely.
    """
    def __init__(self, driver_message: str):
        super().__init__(
            message=f"Database connection failed: {driver_message}",
            code="DATABASE_UNAVAILABLE",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
