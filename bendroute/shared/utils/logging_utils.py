"""Logging utilities for BendRoute."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from ..configuration.settings import LoggingSettings

PACKAGE_LOGGER = "bendroute"

# The A* loop and the direction iterator log every expansion at debug level.
DEFAULT_COMPONENT_LEVELS: Dict[str, str] = {
    "bendroute.algorithms.astar": "INFO",
    "bendroute.algorithms.base": "INFO",
}


class _PackageHandlerMixin:
    """Marks handlers installed by ``setup_logging``."""
    bendroute_handler = True


class _ConsoleHandler(_PackageHandlerMixin, logging.StreamHandler):
    pass


class _RotatingFileHandler(_PackageHandlerMixin, logging.handlers.RotatingFileHandler):
    pass


def setup_logging(settings: 'LoggingSettings') -> logging.Logger:
    """Configure the ``bendroute`` logger tree from settings.

    Only handlers previously installed here are replaced, so an embedding
    application's root configuration is left alone. Component levels from
    ``settings`` override ``DEFAULT_COMPONENT_LEVELS``.

    Args:
        settings: Logging settings configuration

    Returns:
        The package logger
    """
    level = getattr(logging, settings.level.upper())
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "bendroute_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(fmt=settings.format_string, datefmt=settings.date_format)

    if settings.console_output:
        console_handler = _ConsoleHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

    if settings.file_output:
        try:
            log_path = Path(settings.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = _RotatingFileHandler(
                filename=str(log_path),
                maxBytes=settings.max_file_size_mb * 1024 * 1024,
                backupCount=settings.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.error(f"Failed to setup file logging: {e}")

    component_levels = dict(DEFAULT_COMPONENT_LEVELS)
    component_levels.update(settings.component_levels)
    for component, component_level in component_levels.items():
        logging.getLogger(component).setLevel(getattr(logging, component_level.upper()))

    package_logger.debug(f"Logging initialized at {settings.level.upper()}, "
                         f"{len(package_logger.handlers)} handler(s)")
    return package_logger


class ContextLogger(logging.LoggerAdapter):
    """Prefixes every message with ``[key=value ...]`` request context."""

    def process(self, msg, kwargs):
        if self.extra:
            context_str = " ".join(f"{k}={v}" for k, v in self.extra.items())
            return f"[{context_str}] {msg}", kwargs
        return msg, kwargs


def get_context_logger(name: str, **context) -> ContextLogger:
    """Get a context logger with additional information.

    Args:
        name: Logger name
        **context: Context key-value pairs

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), context)
