"""IPFS gateway errors."""

from typing import Optional

from ..core.error import BaseError


class IpfsError(BaseError):
    """Base class for IPFS gateway failures."""

    retryable = False


class IpfsNetworkError(IpfsError):
    """The request did not produce an HTTP response."""

    retryable = True


class IpfsTimeoutError(IpfsNetworkError):
    """The request or the whole operation ran out of time."""


class IpfsStatusError(IpfsError):
    """The gateway answered with a non-success status."""

    def __init__(self, message: str, status: int, body: Optional[bytes] = None):
        """Initialize an instance."""
        super().__init__(message)
        self.status = status
        self.body = body


class IpfsServerError(IpfsStatusError):
    """5xx response."""

    retryable = True


class IpfsClientError(IpfsStatusError):
    """4xx (or other non-retryable) response."""


class IpfsResponseError(IpfsError):
    """A success response whose payload could not be understood."""
