"""Entrypoint helpers."""

import os
from typing import Any, Mapping

from .logging import LoggingConfigurator
from .settings import Settings


def common_config(settings: Mapping[str, Any]):
    """Perform common library configuration."""
    settings = settings if isinstance(settings, Settings) else Settings(settings)
    log_level = settings.get_str("log.level") or os.getenv("LOG_LEVEL")
    json_logs = settings.get_bool("log.json")
    if json_logs is None:
        json_logs = os.getenv("LOG_JSON", "").lower() in ("1", "true")
    LoggingConfigurator.configure(log_level, json_logs)
