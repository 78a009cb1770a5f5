import sys
from typing import Any, Optional, TextIO

from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for CI/file output."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[TextIO] = None):
        super().__init__(log_level)
        # Own loguru handler for plain output
        self.add_handler(
            sink or sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
            colorize=False
        )

    def log_error(self, message: str, error: Optional[BaseException] = None, **fields: Any):
        if error is not None:
            fields["error"] = repr(error)
        self.logger.error(message + self.format_fields(fields))

    def log_warning(self, message: str, **fields: Any):
        self.logger.warning(message + self.format_fields(fields))

    def log_info(self, message: str, **fields: Any):
        self.logger.info(message + self.format_fields(fields))

    def log_debug(self, message: str, **fields: Any):
        self.logger.debug(message + self.format_fields(fields))
