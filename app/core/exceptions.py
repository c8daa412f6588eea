"""
Error taxonomy for the price monitor.

Every error carries a stable ``kind`` so clients can branch on it, and is an
``HTTPException`` so the repository layer can raise it directly.
"""

from fastapi import HTTPException, status


class PriceMonitorError(HTTPException):
    """Base class for application errors"""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(PriceMonitorError):
    """Referenced product, competitor, price, client, SKU or evidence does not exist"""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(PriceMonitorError):
    """Duplicate unique key"""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InvalidArgumentError(PriceMonitorError):
    """Malformed price value or empty required field"""

    kind = "invalid_argument"
    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailableError(PriceMonitorError):
    """Database unreachable while writing"""

    kind = "unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
