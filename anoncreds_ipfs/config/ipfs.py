"""IPFS gateway client configuration."""

import os
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from .error import ConfigError
from .settings import Settings

DEFAULT_ORIGIN = "http://ipfs0:5001"
DEFAULT_TIMEOUT_MS = 15000
DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY_MS = 500


class IpfsConfig:
    """Connection and retry settings for the IPFS gateway client."""

    def __init__(
        self,
        origin: str = DEFAULT_ORIGIN,
        *,
        timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay_ms: int = DEFAULT_INITIAL_DELAY_MS,
        retry_uploads: bool = True,
    ):
        """Initialize an instance.

        Args:
            origin: base URL of the gateway HTTP API
            timeout_ms: timeout for a single request, in milliseconds
            max_retries: maximum number of attempts per operation
            initial_delay_ms: delay before the first retry, doubled on each retry
            retry_uploads: apply the retry policy to uploads as well as fetches

        """
        parsed = urlsplit(origin or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(f"Invalid origin {origin}")
        if max_retries is None or max_retries < 1:
            raise ConfigError(f"max_retries must be at least 1, got {max_retries}")
        if initial_delay_ms is None or initial_delay_ms < 0:
            raise ConfigError(
                f"initial_delay_ms must not be negative, got {initial_delay_ms}"
            )
        if timeout_ms is not None and timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {timeout_ms}")
        self.origin = origin
        self.timeout_ms = timeout_ms
        self.max_retries = max_retries
        self.initial_delay_ms = initial_delay_ms
        self.retry_uploads = retry_uploads

    @classmethod
    def from_settings(
        cls, settings: Mapping[str, Any] = None, environ: Mapping[str, str] = None
    ) -> "IpfsConfig":
        """Load the configuration from settings, falling back to the environment."""
        settings = settings if isinstance(settings, Settings) else Settings(settings)
        environ = os.environ if environ is None else environ

        def lookup(key: str, env_var: str, default):
            value = settings.get_value(key)
            if value is None:
                value = environ.get(env_var)
            return default if value is None or value == "" else value

        merged = Settings(
            {
                "origin": lookup("ipfs.origin", "IPFS_ORIGIN", DEFAULT_ORIGIN),
                "timeout_ms": lookup(
                    "ipfs.timeout_ms", "IPFS_TIMEOUT_MS", DEFAULT_TIMEOUT_MS
                ),
                "max_retries": lookup(
                    "ipfs.max_retries", "IPFS_MAX_RETRIES", DEFAULT_MAX_RETRIES
                ),
                "initial_delay_ms": lookup(
                    "ipfs.initial_delay_ms",
                    "IPFS_INITIAL_DELAY_MS",
                    DEFAULT_INITIAL_DELAY_MS,
                ),
                "retry_uploads": lookup(
                    "ipfs.retry_uploads", "IPFS_RETRY_UPLOADS", True
                ),
            }
        )
        return cls(
            merged.get_str("origin"),
            timeout_ms=merged.get_int("timeout_ms"),
            max_retries=merged.get_int("max_retries"),
            initial_delay_ms=merged.get_int("initial_delay_ms"),
            retry_uploads=merged.get_bool("retry_uploads"),
        )

    def __repr__(self) -> str:
        """Format as a string for debugging."""
        return (
            f"<{self.__class__.__name__} origin={self.origin} "
            f"timeout_ms={self.timeout_ms} max_retries={self.max_retries} "
            f"initial_delay_ms={self.initial_delay_ms} "
            f"retry_uploads={self.retry_uploads}>"
        )
