from typing import Optional, TextIO, Type
from .base import BaseLogger, error_to_fields
from .colorful import ColorfulLogger
from .plain import PlainLogger
from .json import JsonLogger
from .noop import NoOpLogger

_default_logger: Optional[BaseLogger] = None


def create_logger(output_type: str, log_level: str = "INFO", sink: Optional[TextIO] = None) -> BaseLogger:
    """Factory function to create the appropriate logger.
    
    Args:
        output_type: The type of logger to create (colorful, plain, or json)
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sink: Stream the logger writes to, stdout by default
    """
    loggers: dict[str, Type[BaseLogger]] = {
        "colorful": ColorfulLogger,
        "plain": PlainLogger,
        "json": JsonLogger
    }
    
    if output_type.lower() not in loggers:
        raise ValueError(f"Invalid output type: {output_type}. Must be one of: {', '.join(loggers.keys())}")
    
    return loggers[output_type.lower()](log_level, sink)


def get_default_logger() -> BaseLogger:
    """Return the shared structured logger, creating it on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = JsonLogger()
    return _default_logger


__all__ = [
    'BaseLogger', 'ColorfulLogger', 'PlainLogger', 'JsonLogger', 'NoOpLogger',
    'create_logger', 'get_default_logger', 'error_to_fields'
]
