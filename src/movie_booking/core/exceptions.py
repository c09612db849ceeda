"""
Domain errors raised by the service layer.

Routes translate these into HTTP responses; every error carries the status
code it should surface as.
"""


class MovieBookingError(Exception):
    """Base exception for all service errors"""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(MovieBookingError):
    """Raised on duplicate email or malformed input"""
    status_code = 400


class AuthError(MovieBookingError):
    """Raised on bad credentials or a missing/invalid bearer token"""
    status_code = 401


class ConflictError(MovieBookingError):
    """Raised when a seat is already booked"""
    status_code = 400


class NotFoundError(MovieBookingError):
    """Raised when a referenced row does not exist"""
    status_code = 404


class StoreError(MovieBookingError):
    """Raised when the database fails or a query exceeds its time bound"""
    status_code = 500
