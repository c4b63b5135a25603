from fastapi import status


class BaseAPIException(Exception):
    """
    Base class for every error the service raises on purpose.
    Carries the HTTP status the error is reported with.
    """
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class BadRequestException(BaseAPIException):
    """400: the request itself is wrong (empty body, bad id, failed validation)"""
    def __init__(self, message: str = "Bad Request"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
        )

# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class StorageError(BaseAPIException):
    """
    500: the store failed (connectivity, constraint violation, disk...).
    The underlying message is passed to the client as is.
    """
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

class StudentNotFoundError(NotFoundException):
    """No row matches the requested student id."""
    def __init__(self, student_id: int):
        self.student_id = student_id
        super().__init__(message=f"no student found with id: {student_id}")
