"""IPFS gateway access."""

from .client import IpfsClient
from .error import (
    IpfsClientError,
    IpfsError,
    IpfsNetworkError,
    IpfsResponseError,
    IpfsServerError,
    IpfsStatusError,
    IpfsTimeoutError,
)

__all__ = [
    "IpfsClient",
    "IpfsClientError",
    "IpfsError",
    "IpfsNetworkError",
    "IpfsResponseError",
    "IpfsServerError",
    "IpfsStatusError",
    "IpfsTimeoutError",
]
