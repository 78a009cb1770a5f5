import click
from .base import BaseLogger
import sys
from typing import Any, Optional, TextIO


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[TextIO] = None):
        super().__init__(log_level)
        # Own loguru handler for colored output
        self.add_handler(
            sink or sys.stdout,
            colorize=True,
            format="<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                   "<level>{level: <8}</level> | "
                   "<white>{message}</white>"
        )

    def _fields(self, fields: dict) -> str:
        return click.style(self.format_fields(fields), fg="bright_black")

    def log_error(self, message: str, error: Optional[BaseException] = None, **fields: Any):
        if error is not None:
            fields["error"] = repr(error)
        self.logger.error(click.style(message, fg="red", bold=True) + self._fields(fields))

    def log_warning(self, message: str, **fields: Any):
        self.logger.warning(click.style(message, fg="yellow", bold=True) + self._fields(fields))

    def log_info(self, message: str, **fields: Any):
        self.logger.info(click.style(message, fg="white") + self._fields(fields))

    def log_debug(self, message: str, **fields: Any):
        self.logger.debug(click.style(message, fg="blue") + self._fields(fields))
