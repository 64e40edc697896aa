"""
Asset Bank client exceptions and failure classification.

Every failure that can leave the transport is one of the exceptions below.
`classify_failure` turns an exception into a `FailureClass` so that the
retry loop decides on a plain tagged value instead of the exception type.
"""

from dataclasses import dataclass
from typing import Optional

from .config import RETRYABLE_CLIENT_STATUS_CODES


TRANSIENT = "transient"
TERMINAL = "terminal"


class AssetBankError(Exception):
    """Base exception for all Asset Bank client errors."""
    pass


class ConfigurationError(AssetBankError):
    """Raised when the client is built without a host or an access token."""
    pass


class ApiError(AssetBankError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class RateLimitError(ApiError):
    """Raised when the API answers 429 Too Many Requests."""

    def __init__(self, url: str):
        super().__init__(429, url)


class NetworkError(AssetBankError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Network error for {url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class FailureClass:
    """Retry decision for a failed attempt."""
    kind: str
    status_code: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.kind == TERMINAL


def classify_failure(error: Exception) -> FailureClass:
    """
    Classify a failed attempt as transient or terminal.

    Client errors (4xx) are terminal except 429 and 408. Server errors,
    network errors and anything unexpected are transient.
    """
    if isinstance(error, ApiError):
        code = error.status_code
        if 400 <= code < 500 and code not in RETRYABLE_CLIENT_STATUS_CODES:
            return FailureClass(TERMINAL, code)
        return FailureClass(TRANSIENT, code)
    if isinstance(error, ConfigurationError):
        return FailureClass(TERMINAL)
    return FailureClass(TRANSIENT)
