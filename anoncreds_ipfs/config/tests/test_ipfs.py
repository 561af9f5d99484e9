import pytest

from ..error import ConfigError, SettingsError
from ..ipfs import IpfsConfig
from ..settings import Settings


def test_defaults():
    config = IpfsConfig.from_settings({}, environ={})
    assert config.origin == "http://ipfs0:5001"
    assert config.timeout_ms == 15000
    assert config.max_retries == 3
    assert config.initial_delay_ms == 500
    assert config.retry_uploads is True
    assert "ipfs0" in repr(config)


def test_from_environment():
    config = IpfsConfig.from_settings(
        None,
        environ={
            "IPFS_ORIGIN": "https://gateway.example.com",
            "IPFS_TIMEOUT_MS": "2000",
            "IPFS_MAX_RETRIES": "5",
            "IPFS_INITIAL_DELAY_MS": "10",
            "IPFS_RETRY_UPLOADS": "false",
        },
    )
    assert config.origin == "https://gateway.example.com"
    assert config.timeout_ms == 2000
    assert config.max_retries == 5
    assert config.initial_delay_ms == 10
    assert config.retry_uploads is False


def test_settings_take_precedence():
    config = IpfsConfig.from_settings(
        Settings({"ipfs.origin": "http://localhost:5001", "ipfs.max_retries": 1}),
        environ={"IPFS_ORIGIN": "http://ignored:5001", "IPFS_MAX_RETRIES": "4"},
    )
    assert config.origin == "http://localhost:5001"
    assert config.max_retries == 1


@pytest.mark.parametrize(
    "origin", ["", "ipfs0:5001", "ftp://ipfs0:5001", "http://", "not a url"]
)
def test_invalid_origin(origin):
    with pytest.raises(ConfigError) as excinfo:
        IpfsConfig(origin)
    assert "Invalid origin" in str(excinfo.value)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_retries": 0},
        {"initial_delay_ms": -1},
        {"timeout_ms": 0},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        IpfsConfig("http://ipfs0:5001", **kwargs)


def test_invalid_environment_value():
    with pytest.raises(SettingsError):
        IpfsConfig.from_settings({}, environ={"IPFS_MAX_RETRIES": "many"})


@pytest.mark.parametrize("value", ["no", "FALSE", "off"])
def test_retry_uploads_disabled_from_environment(value):
    config = IpfsConfig.from_settings({}, environ={"IPFS_RETRY_UPLOADS": value})
    assert config.retry_uploads is False
