"""Structured logging infrastructure.

Public API:
    - configure_logging(): Render pkglang's logs from an application
    - get_module_logger(): Get a logger for the calling module
"""

from pkglang.logging.setup import (
    PACKAGE_LOGGER_NAME,
    configure_logging,
    get_module_logger,
)

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "get_module_logger",
]
