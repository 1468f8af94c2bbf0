"""Configuration module for the track hydrator.

This module provides a type-safe configuration system using Pydantic Settings
and Loguru-based logging helpers.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_config(key: str, default=None) -> Any
    Flat-key configuration access function

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for logging errors in external API calls

log_startup_info() -> None
    Log system configuration at startup

Usage:
------
```python
from src.config import settings
ttl = settings.musicbrainz.cache_ttl_seconds

from src.config import get_logger
logger = get_logger(__name__)
logger.info("Starting lookup")
```
"""

from .logging import (
    get_logger,
    log_startup_info,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import LoggingConfig, MusicBrainzConfig, Settings, get_config, settings

__all__ = [
    "LoggingConfig",
    "MusicBrainzConfig",
    "Settings",
    "get_config",
    "get_logger",
    "log_startup_info",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
