# src/bitstamp_cli/connection/exceptions.py

from enum import Enum
from typing import Optional


class NotFoundReason(Enum):
    """Documented Bitstamp 404 sub-codes."""

    UNKNOWN_NOT_FOUND = ("404.001", "Unknown not found error")
    ORDER_NOT_FOUND = ("404.002", "Order not found for corresponding request")
    CURRENCY_PAIR_NOT_FOUND = ("404.003", "Currency pair not found for corresponding request")
    TRADE_ACCOUNT_NOT_FOUND = ("404.004", "Trade account not found for provided API key")
    ORDER_BOOK_NOT_FOUND = ("404.005", "Order book not found")
    CURRENCY_NOT_FOUND = ("404.006", "Currency not found for corresponding request")
    MARKET_NOT_FOUND = ("404.007", "Market not found for corresponding request")

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["NotFoundReason"]:
        for reason in cls:
            if reason.code == code:
                return reason
        return None

    def __str__(self) -> str:
        return f"{self.description} ({self.code})"


class BitstampAPIError(Exception):
    """Base exception for all Bitstamp API related errors."""
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NetworkError(BitstampAPIError):
    """Raised when the request never produced an HTTP response (DNS, refused connection, timeout)."""
    pass


class HTTPStatusError(BitstampAPIError):
    """Raised when the API answers with an unexpected, non-2xx status code."""
    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        super().__init__(f"Bitstamp API returned HTTP {status_code}", url=url)


class NotFoundError(BitstampAPIError):
    """Raised on HTTP 404.

    ``reason`` is only set when the error body carried one of the documented
    sub-codes; otherwise the condition is a generic "not found".
    """
    def __init__(self, url: Optional[str] = None, reason: Optional[NotFoundReason] = None):
        self.reason = reason
        message = f"Not found: {reason}" if reason else "Not found"
        super().__init__(message, url=url)


class DecodeError(BitstampAPIError):
    """Raised when a response body does not match the shape an operation expects."""
    def __init__(self, operation: str, detail: str, url: Optional[str] = None):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Failed to decode {operation} response: {detail}", url=url)
