import signal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..logging import BaseLogger, NoOpLogger, get_default_logger


class ShutdownConfig(BaseModel):
    """Configuration for a ShutdownCoordinator.

    Leaving ``logger`` out selects the default structured logger, while an
    explicit ``logger=None`` silences the coordinator.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    logger: Optional[BaseLogger] = None
    parallel: bool = False
    signals: List[str] = ["SIGINT", "SIGTERM"]

    @field_validator("signals")
    @classmethod
    def validate_signals(cls, value: List[str]) -> List[str]:
        """Ensure every entry names a signal known to this platform."""
        for name in value:
            if not hasattr(signal.Signals, name):
                raise ValueError(f"Unknown signal: {name}")
        return value

    def resolve_logger(self) -> BaseLogger:
        if "logger" not in self.model_fields_set:
            return get_default_logger()
        return self.logger if self.logger is not None else NoOpLogger()

    def resolve_signals(self) -> List[signal.Signals]:
        return [signal.Signals[name] for name in self.signals]
