from typing import Any, Optional

from .base import BaseLogger


class NoOpLogger(BaseLogger):
    """Logger that discards everything."""

    def log_error(self, message: str, error: Optional[BaseException] = None, **fields: Any):
        pass

    def log_warning(self, message: str, **fields: Any):
        pass

    def log_info(self, message: str, **fields: Any):
        pass

    def log_debug(self, message: str, **fields: Any):
        pass
