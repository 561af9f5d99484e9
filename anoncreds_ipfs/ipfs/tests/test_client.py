import pytest

from aiohttp.test_utils import AioHTTPTestCase

from ...config.error import ConfigError
from .. import client as test_module
from ..error import IpfsClientError, IpfsServerError
from .gateway import GatewayStub, make_cid


class TestIpfsClient(AioHTTPTestCase):
    async def get_application(self):
        self.gateway = GatewayStub()
        return self.gateway.application()

    def make_client(self, **kwargs) -> test_module.IpfsClient:
        kwargs.setdefault("initial_delay_ms", 1)
        return test_module.IpfsClient(
            str(self.server.make_url("/")), session=self.client.session, **kwargs
        )

    async def test_get_file(self):
        self.gateway.files["okCid"] = bytes.fromhex("1234")
        result = await self.make_client().get_file("okCid")
        assert result == bytes.fromhex("1234")
        assert self.gateway.cat_calls == ["okCid"]

    async def test_get_file_bad_request_not_retried(self):
        self.gateway.script("badCid", (400, b"Bad Request"), (200, b"ok"))
        with self.assertRaises(IpfsClientError) as ctx:
            await self.make_client(max_retries=3).get_file("badCid")
        assert ctx.exception.status == 400
        assert "Error calling IPFS: 400 Bad Request" in ctx.exception.message
        assert self.gateway.cat_calls == ["badCid"]

    async def test_get_file_retries_server_error(self):
        self.gateway.script("test500", (500, b"Internal Server Error"), (200, b"ok"))
        result = await self.make_client(max_retries=3).get_file("test500")
        assert result == b"ok"
        assert self.gateway.cat_calls == ["test500", "test500"]

    async def test_get_file_surfaces_final_server_error(self):
        self.gateway.script(
            "testMax500", (500, b"Error 1"), (502, b"Error 2"), (503, b"Error 3")
        )
        with self.assertRaises(IpfsServerError) as ctx:
            await self.make_client(max_retries=3).get_file("testMax500")
        assert ctx.exception.status == 503
        assert "Error calling IPFS: 503" in ctx.exception.message
        assert len(self.gateway.cat_calls) == 3

    async def test_upload_file(self):
        data = b"hello"
        cid = await self.make_client().upload_file(data)
        assert cid == make_cid(data)
        assert self.gateway.add_calls == [data]
        assert await self.make_client().get_file(cid) == data

    async def test_upload_file_retries_server_error(self):
        self.gateway.add_statuses = [503, 200]
        cid = await self.make_client().upload_file(b"hello")
        assert cid == make_cid(b"hello")
        assert len(self.gateway.add_calls) == 2

    async def test_upload_file_single_attempt_when_upload_retry_disabled(self):
        self.gateway.add_statuses = [503, 200]
        with self.assertRaises(IpfsServerError):
            await self.make_client(retry_uploads=False).upload_file(b"hello")
        assert len(self.gateway.add_calls) == 1

    async def test_upload_file_bad_request(self):
        self.gateway.add_statuses = [400]
        with self.assertRaises(IpfsClientError):
            await self.make_client().upload_file(b"hello")
        assert len(self.gateway.add_calls) == 1


class TestIpfsClientConfig:
    def test_valid_origin(self):
        ipfs = test_module.IpfsClient("https://example.com")
        assert isinstance(ipfs, test_module.IpfsClient)
        assert ipfs.request_timeout == 15.0

    def test_invalid_origin(self):
        with pytest.raises(ConfigError, match="Invalid origin wibble"):
            test_module.IpfsClient("wibble")

    @pytest.mark.parametrize("kwargs", [{"max_retries": 0}, {"initial_delay_ms": -1}])
    def test_invalid_retry_settings(self, kwargs):
        with pytest.raises(ConfigError):
            test_module.IpfsClient("http://ipfs", **kwargs)

    def test_from_config(self):
        config = test_module.IpfsConfig(
            "http://ipfs:5001", max_retries=5, initial_delay_ms=10, timeout_ms=None
        )
        ipfs = test_module.IpfsClient.from_config(config)
        assert ipfs.origin == "http://ipfs:5001"
        assert ipfs.config.max_retries == 5
        assert ipfs.request_timeout is None
