import json
import logging
from io import StringIO
from unittest import TestCase, mock

import pytest

from .. import logging as test_module
from .. import util


class TestLoggingConfigurator(TestCase):
    def tearDown(self):
        logger = logging.getLogger("anoncreds_ipfs")
        for handler in list(logger.handlers):
            if handler.get_name() == test_module.LoggingConfigurator.handler_name:
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_configure_plain(self):
        stream = StringIO()
        test_module.LoggingConfigurator.configure("info", stream=stream)
        logging.getLogger("anoncreds_ipfs.ipfs.client").info("fetched %s", "cid")
        assert "INFO anoncreds_ipfs.ipfs.client fetched cid" in stream.getvalue()

    def test_configure_json(self):
        stream = StringIO()
        test_module.LoggingConfigurator.configure(
            "error", json_logs=True, stream=stream
        )
        logger = logging.getLogger("anoncreds_ipfs.anoncreds")
        logger.warning("dropped")
        logger.error("Failed to fetch %s from IPFS", "cid", extra={"cid": "cid"})
        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["message"] == "Failed to fetch cid from IPFS"
        assert record["levelname"] == "ERROR"
        assert record["cid"] == "cid"

    def test_configure_replaces_handler(self):
        test_module.LoggingConfigurator.configure()
        handler = test_module.LoggingConfigurator.configure()
        logger = logging.getLogger("anoncreds_ipfs")
        named = [
            existing
            for existing in logger.handlers
            if existing.get_name() == test_module.LoggingConfigurator.handler_name
        ]
        assert named == [handler]
        assert logger.level == logging.WARNING

    def test_configure_invalid_level(self):
        with pytest.raises(ValueError):
            test_module.LoggingConfigurator.configure("loud")

    @mock.patch.object(test_module.LoggingConfigurator, "configure")
    def test_common_config(self, mock_configure):
        util.common_config({"log.level": "debug", "log.json": True})
        mock_configure.assert_called_once_with("debug", True)

    @mock.patch.dict("os.environ", {"LOG_LEVEL": "info", "LOG_JSON": "true"})
    @mock.patch.object(test_module.LoggingConfigurator, "configure")
    def test_common_config_environment(self, mock_configure):
        util.common_config({})
        mock_configure.assert_called_once_with("info", True)
