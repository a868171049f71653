"""
Structured logging for gen-mode.

Log records go to standard error so that generated source printed on standard
output (``--dry-run``) stays clean.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import GeneratorSettings, get_settings

LOGGER_NAME = "gen_mode"


class StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def setup_logging(settings: Optional[GeneratorSettings] = None):
    """Setup structured logging for gen-mode."""
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if settings.log_format == "json"
                else structlog.dev.ConsoleRenderer(colors=False)
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(getattr(logging, settings.log_level))

    # Remove existing handlers
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = StderrHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def _startup_settings() -> GeneratorSettings:
    """Environment settings, or the defaults when the environment is invalid.

    The CLI validates the environment again and reports the error itself.
    """
    try:
        return get_settings()
    except ValueError:
        return GeneratorSettings.model_construct()


# Initialize logging on module import
setup_logging(_startup_settings())
