import traceback
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TextIO

from loguru import logger

_default_handler_removed = False


def _remove_default_handler() -> None:
    """Drop loguru's stderr handler the first time a logger adds its own."""
    global _default_handler_removed
    if _default_handler_removed:
        return
    _default_handler_removed = True
    try:
        logger.remove(0)
    except ValueError:
        # Already removed by the application
        pass


def error_to_fields(error: BaseException) -> Dict[str, Any]:
    """Convert an exception into a structured log field."""
    return {
        "message": str(error),
        "name": type(error).__name__,
        "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
    }


class BaseLogger(ABC):
    """Abstract base class for loggers."""
    
    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level
        self.handler_id: Optional[int] = None

    def add_handler(self, sink: TextIO, **options: Any) -> None:
        """Attach a loguru handler that only receives this logger's records.

        Each logger tags its records with its own id, so several loggers
        writing to different sinks and formats can coexist.
        """
        _remove_default_handler()
        logger_id = uuid.uuid4().hex
        self.handler_id = logger.add(
            sink,
            level=self.log_level,
            filter=lambda record: record["extra"].get("logger_id") == logger_id,
            **options
        )
        self.logger = logger.bind(logger_id=logger_id)

    def close(self) -> None:
        """Detach this logger's handler."""
        if self.handler_id is not None:
            logger.remove(self.handler_id)
            self.handler_id = None

    @abstractmethod
    def log_error(self, message: str, error: Optional[BaseException] = None, **fields: Any):
        """Log an error message, optionally with the error that caused it."""
        pass

    @abstractmethod
    def log_warning(self, message: str, **fields: Any):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str, **fields: Any):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str, **fields: Any):
        """Log a debug message."""
        pass

    @staticmethod
    def format_fields(fields: Dict[str, Any]) -> str:
        """Render structured fields as a ``key=value`` suffix."""
        if not fields:
            return ""
        return " " + " ".join(f"{key}={value}" for key, value in fields.items())
