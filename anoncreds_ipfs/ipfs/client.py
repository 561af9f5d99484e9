"""IPFS HTTP gateway client with bounded retries."""

import asyncio
import json
import logging
from typing import Mapping, Optional
from urllib.parse import urljoin

import async_timeout
from aiohttp import BaseConnector, ClientError, ClientSession, FormData

from ..config.ipfs import (
    DEFAULT_INITIAL_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
    IpfsConfig,
)
from ..utils.repeat import RepeatAttempt, RepeatSequence
from .error import (
    IpfsClientError,
    IpfsError,
    IpfsNetworkError,
    IpfsResponseError,
    IpfsServerError,
    IpfsTimeoutError,
)

LOGGER = logging.getLogger(__name__)

CAT_ROUTE = "/api/v0/cat"
ADD_ROUTE = "/api/v0/add"


class IpfsClient:
    """Fetch and upload raw bytes through the IPFS HTTP API.

    Network failures and 5xx responses are retried up to `max_retries` attempts
    in total, waiting `initial_delay_ms` before the first retry and doubling the
    wait on each further retry. Any other non-success status fails at once.
    Requests are always issued one after another.
    """

    def __init__(
        self,
        origin: str,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay_ms: int = DEFAULT_INITIAL_DELAY_MS,
        timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
        retry_uploads: bool = True,
        session: ClientSession = None,
        connector: BaseConnector = None,
    ):
        """Initialize the client.

        Args:
            origin: base URL of the gateway HTTP API
            max_retries: maximum number of attempts per operation
            initial_delay_ms: wait before the first retry, in milliseconds
            timeout_ms: timeout of a single request, in milliseconds
            retry_uploads: apply the retry policy to uploads
            session: a shared ClientSession, left open by this client
            connector: an optional connector for sessions owned by this client

        """
        self.config = IpfsConfig(
            origin,
            timeout_ms=timeout_ms,
            max_retries=max_retries,
            initial_delay_ms=initial_delay_ms,
            retry_uploads=retry_uploads,
        )
        self._session = session
        self._connector = connector

    @classmethod
    def from_config(cls, config: IpfsConfig, **kwargs) -> "IpfsClient":
        """Create a client from a loaded configuration."""
        return cls(
            config.origin,
            max_retries=config.max_retries,
            initial_delay_ms=config.initial_delay_ms,
            timeout_ms=config.timeout_ms,
            retry_uploads=config.retry_uploads,
            **kwargs,
        )

    @property
    def origin(self) -> str:
        """Accessor for the gateway origin."""
        return self.config.origin

    @property
    def request_timeout(self) -> Optional[float]:
        """Timeout of a single request, in seconds."""
        if self.config.timeout_ms is None:
            return None
        return self.config.timeout_ms / 1000

    async def get_file(self, cid: str, *, timeout: Optional[float] = None) -> bytes:
        """Fetch the bytes stored under a content id.

        Args:
            cid: the content id
            timeout: optional bound on the whole operation, retries included

        Raises:
            IpfsNetworkError: no response after the final attempt
            IpfsServerError: 5xx on the final attempt
            IpfsClientError: non-retryable status
            IpfsTimeoutError: `timeout` expired

        """
        try:
            async with async_timeout.timeout(timeout):
                return await self._call(CAT_ROUTE, {"arg": cid})
        except asyncio.TimeoutError as err:
            raise IpfsTimeoutError(f"Timeout fetching file {cid} from IPFS") from err

    async def upload_file(self, data: bytes, *, timeout: Optional[float] = None) -> str:
        """Upload bytes and return the content id minted by the gateway."""
        try:
            async with async_timeout.timeout(timeout):
                body = await self._call(
                    ADD_ROUTE,
                    {"cid-version": "1"},
                    data=data,
                    retry=self.config.retry_uploads,
                )
        except asyncio.TimeoutError as err:
            raise IpfsTimeoutError("Timeout uploading file to IPFS") from err

        try:
            cid = json.loads(body)["Hash"]
        except (ValueError, TypeError, KeyError) as err:
            raise IpfsResponseError("Error calling IPFS: invalid add response") from err
        if not isinstance(cid, str) or not cid:
            raise IpfsResponseError("Error calling IPFS: invalid add response")
        return cid

    async def _call(
        self,
        route: str,
        params: Mapping[str, str],
        *,
        data: Optional[bytes] = None,
        retry: bool = True,
    ) -> bytes:
        limit = self.config.max_retries if retry else 1
        url = urljoin(self.origin, route)
        session = self._session
        owned = session is None
        if owned:
            session = ClientSession(
                connector=self._connector,
                connector_owner=(not self._connector),
                trust_env=True,
            )
        try:
            async for attempt in RepeatSequence(
                limit, self.config.initial_delay_ms / 1000
            ):
                try:
                    return await self._attempt(attempt, session, url, params, data)
                except IpfsError as err:
                    if not err.retryable or attempt.final:
                        raise
                    LOGGER.warning(
                        "IPFS call to %s failed (attempt %d of %d), "
                        "retrying in %.3fs: %s",
                        route,
                        attempt.index,
                        limit,
                        attempt.next_interval,
                        err.message,
                    )
        finally:
            if owned:
                await session.close()

    async def _attempt(
        self,
        attempt: RepeatAttempt,
        session: ClientSession,
        url: str,
        params: Mapping[str, str],
        data: Optional[bytes],
    ) -> bytes:
        form = None
        if data is not None:
            form = FormData()
            form.add_field(
                "file", data, filename="file", content_type="application/octet-stream"
            )
        try:
            async with attempt.timeout(self.request_timeout):
                async with session.post(url, params=params, data=form) as response:
                    status = response.status
                    reason = response.reason
                    body = await response.read()
        except asyncio.TimeoutError as err:
            raise IpfsTimeoutError(
                f"Error calling IPFS: request to {url} timed out"
            ) from err
        except ClientError as err:
            raise IpfsNetworkError(f"Error calling IPFS: {err}") from err

        if 200 <= status < 300:
            return body
        error_cls = IpfsServerError if status >= 500 else IpfsClientError
        raise error_cls(f"Error calling IPFS: {status} {reason}", status, body)
