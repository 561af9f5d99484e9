"""Utilities related to logging."""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"


class LoggingConfigurator:
    """Utility class used to configure logging for the registry."""

    handler_name = "anoncreds_ipfs"

    @classmethod
    def configure(
        cls,
        log_level: Optional[str] = None,
        json_logs: bool = False,
        stream=None,
    ) -> logging.Handler:
        """Configure the package logger.

        Installs a single stream handler on the `anoncreds_ipfs` logger, replacing
        one installed by an earlier call. With `json_logs` each record is emitted
        as a JSON object, including any key/value pairs passed through `extra`.

        Args:
            log_level: level name, defaults to WARNING
            json_logs: emit JSON records instead of plain text
            stream: output stream, defaults to stderr

        Returns:
            The installed handler

        """
        level = (log_level or DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {log_level}")

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(cls.handler_name)
        if json_logs:
            handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger = logging.getLogger("anoncreds_ipfs")
        for existing in list(logger.handlers):
            if existing.get_name() == cls.handler_name:
                logger.removeHandler(existing)
        logger.addHandler(handler)
        logger.setLevel(level)
        return handler
