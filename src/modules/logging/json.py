import sys
from typing import Any, Optional, TextIO

from .base import BaseLogger, error_to_fields


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing.

    Structured fields end up in the serialized record's ``extra`` mapping.
    """
    
    def __init__(self, log_level: str = "INFO", sink: Optional[TextIO] = None):
        super().__init__(log_level)
        # Own loguru handler for JSON output
        self.add_handler(
            sink or sys.stdout,
            serialize=True,  # JSON output
            format="{time} | {level} | {message}"
        )

    def log_error(self, message: str, error: Optional[BaseException] = None, **fields: Any):
        if error is not None:
            fields["error"] = error_to_fields(error)
        self.logger.bind(**fields).error(message)

    def log_warning(self, message: str, **fields: Any):
        self.logger.bind(**fields).warning(message)

    def log_info(self, message: str, **fields: Any):
        self.logger.bind(**fields).info(message)

    def log_debug(self, message: str, **fields: Any):
        self.logger.bind(**fields).debug(message)
