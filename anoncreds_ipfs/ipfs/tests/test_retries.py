import asyncio
import time
from unittest import IsolatedAsyncioTestCase, mock

from aiohttp import ClientConnectionError

from .. import client as test_module
from ..error import (
    IpfsClientError,
    IpfsNetworkError,
    IpfsResponseError,
    IpfsServerError,
    IpfsTimeoutError,
)


class MockResponse:
    def __init__(self, status: int = 200, body: bytes = b"", reason: str = "OK"):
        self.status = status
        self.body = body
        self.reason = reason

    async def read(self):
        return self.body


class MockRequest:
    def __init__(self, outcome):
        self.outcome = outcome

    async def __aenter__(self):
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        if callable(self.outcome):
            return await self.outcome()
        return self.outcome

    async def __aexit__(self, *exc_info):
        return False


class ScriptedSession:
    """Session double replaying one scripted outcome per request."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return MockRequest(self.outcomes.pop(0))

    async def close(self):
        pass


async def hang():
    await asyncio.Event().wait()


class TestIpfsRetries(IsolatedAsyncioTestCase):
    def make_client(self, session, **kwargs):
        kwargs.setdefault("max_retries", 3)
        kwargs.setdefault("initial_delay_ms", 1)
        return test_module.IpfsClient("http://ipfs", session=session, **kwargs)

    async def test_success_on_first_attempt(self):
        session = ScriptedSession(MockResponse(200, b"ok"))
        result = await self.make_client(session).get_file("testOk")
        assert result == b"ok"
        assert len(session.calls) == 1
        url, kwargs = session.calls[0]
        assert url == "http://ipfs/api/v0/cat"
        assert kwargs["params"] == {"arg": "testOk"}

    async def test_network_error_then_server_error_then_success(self):
        session = ScriptedSession(
            ClientConnectionError("Network Error"),
            MockResponse(500, b"Internal Server Error", "Internal Server Error"),
            MockResponse(200, b"ok"),
        )
        result = await self.make_client(session).get_file("testMixed")
        assert result == b"ok"
        assert len(session.calls) == 3

    async def test_network_error_exhausts_retries(self):
        session = ScriptedSession(
            ClientConnectionError("Network Error 1"),
            ClientConnectionError("Network Error 2"),
            ClientConnectionError("Network Error 3"),
        )
        with self.assertRaises(IpfsNetworkError) as ctx:
            await self.make_client(session).get_file("testMaxRetryNet")
        assert isinstance(ctx.exception.__cause__, ClientConnectionError)
        assert str(ctx.exception.__cause__) == "Network Error 3"
        assert len(session.calls) == 3

    async def test_client_error_is_not_retried(self):
        session = ScriptedSession(
            MockResponse(404, b"Not Found", "Not Found"), MockResponse(200, b"ok")
        )
        with self.assertRaises(IpfsClientError) as ctx:
            await self.make_client(session).get_file("test404")
        assert ctx.exception.status == 404
        assert ctx.exception.body == b"Not Found"
        assert len(session.calls) == 1

    async def test_single_attempt_configuration(self):
        session = ScriptedSession(MockResponse(500, b"", "Internal Server Error"))
        with self.assertRaises(IpfsServerError):
            await self.make_client(session, max_retries=1).get_file("testOnce")
        assert len(session.calls) == 1

    async def test_backoff_delays_double(self):
        session = ScriptedSession(
            MockResponse(500, b"Err 1"),
            MockResponse(500, b"Err 2"),
            MockResponse(500, b"Err 3"),
            MockResponse(200, b"ok"),
        )
        sleeps = []

        async def sleep(delay):
            sleeps.append(delay)

        with mock.patch.object(test_module.asyncio, "sleep", sleep):
            ipfs = self.make_client(session, max_retries=4, initial_delay_ms=10)
            assert await ipfs.get_file("testBackoff") == b"ok"
        assert sleeps == [0.01, 0.02, 0.04]

    async def test_backoff_elapsed_time(self):
        session = ScriptedSession(
            MockResponse(500, b"Err 1"),
            MockResponse(500, b"Err 2"),
            MockResponse(200, b"ok"),
        )
        ipfs = self.make_client(session, initial_delay_ms=10)
        start = time.perf_counter()
        result = await ipfs.get_file("testBackoff")
        elapsed = time.perf_counter() - start
        assert result == b"ok"
        assert len(session.calls) == 3
        # 10ms before the first retry, 20ms before the second
        assert elapsed >= 0.03

    async def test_request_timeout_is_retried(self):
        session = ScriptedSession(hang, MockResponse(200, b"ok"))
        ipfs = self.make_client(session, timeout_ms=10)
        assert await ipfs.get_file("testSlow") == b"ok"
        assert len(session.calls) == 2

    async def test_operation_timeout(self):
        session = ScriptedSession(hang)
        ipfs = self.make_client(session, timeout_ms=None)
        with self.assertRaises(IpfsTimeoutError) as ctx:
            await ipfs.get_file("testCid", timeout=0.01)
        assert ctx.exception.message == "Timeout fetching file testCid from IPFS"

    async def test_upload_timeout(self):
        session = ScriptedSession(hang)
        ipfs = self.make_client(session, timeout_ms=None)
        with self.assertRaises(IpfsTimeoutError) as ctx:
            await ipfs.upload_file(b"hello", timeout=0.01)
        assert ctx.exception.message == "Timeout uploading file to IPFS"

    async def test_upload_sends_multipart_file(self):
        session = ScriptedSession(MockResponse(200, b'{"Hash": "testCid"}'))
        assert await self.make_client(session).upload_file(b"hello") == "testCid"
        url, kwargs = session.calls[0]
        assert url == "http://ipfs/api/v0/add"
        assert kwargs["params"] == {"cid-version": "1"}
        assert kwargs["data"] is not None

    async def test_upload_invalid_payload(self):
        for body in (b'{"Hash":null}', b"not json", b"[]"):
            session = ScriptedSession(MockResponse(200, body))
            with self.assertRaises(IpfsResponseError):
                await self.make_client(session).upload_file(b"hello")
            assert len(session.calls) == 1

    async def test_owned_session_is_closed(self):
        session = ScriptedSession(MockResponse(200, b"ok"))
        session.close = mock.AsyncMock()
        with mock.patch.object(
            test_module, "ClientSession", mock.MagicMock(return_value=session)
        ):
            ipfs = test_module.IpfsClient("http://ipfs")
            assert await ipfs.get_file("testOk") == b"ok"
        session.close.assert_awaited_once()
