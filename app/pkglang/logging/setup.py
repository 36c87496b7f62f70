"""Structured logging for pkglang.

Every module logs through a structlog logger wrapped around a standard
library logger named after the module, so records land under the
``pkglang`` logger hierarchy. That hierarchy carries a NullHandler and
structlog's global configuration is never touched: pkglang stays silent
until the host application configures logging. Applications without a
logging setup of their own can call configure_logging().

Usage:
    from pkglang.logging import configure_logging, get_module_logger

    # Optional, in the application's startup code
    configure_logging()

    # In a pkglang module
    logger = get_module_logger()
    logger.info("catalog_resolved", culture="fr")
"""

import inspect
import logging
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from pkglang.configuration import settings

PACKAGE_LOGGER_NAME = "pkglang"

_HANDLER_NAME = "pkglang-structlog"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> logging.Logger:
    """Attach a rendering handler to the ``pkglang`` logger.

    Calling it again replaces the handler it installed before.

    Args:
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
            Defaults to settings.LOG_LEVEL if not provided.
        is_production: Optional override for production mode. Defaults to
            settings.is_production if not provided. Controls JSON vs console output.

    Returns:
        The configured ``pkglang`` standard library logger.
    """
    prod_mode = is_production if is_production is not None else settings.is_production
    renderer = (
        structlog.processors.JSONRenderer()
        if prod_mode
        else structlog.dev.ConsoleRenderer()
    )

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)

    effective_log_level = log_level or settings.LOG_LEVEL
    package_logger.setLevel(getattr(logging, effective_log_level.upper(), logging.INFO))
    return package_logger


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Example:
        # In pkglang/i18n/repository.py
        logger = get_module_logger()
        # context: {"component": "repository", "module_path": "pkglang.i18n.repository"}
    """
    module_name = PACKAGE_LOGGER_NAME
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    if frame is not None:
        module = inspect.getmodule(frame)
        if module:
            module_name = module.__name__

    return structlog.wrap_logger(
        logging.getLogger(module_name),
        processors=_PROCESSORS,
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
