"""Shutdown coordination module for closing application services exactly once."""

from .closable import Closable
from .config import ShutdownConfig
from .coordinator import ShutdownCoordinator
from .decorator import shutdown_hook
from .errors import ShutdownError, ShutdownInProgressError, ShutdownTimeoutError
from .factory import ShutdownCoordinatorFactory
from .triggers import ManualTriggerSource, SignalTriggerSource, TriggerSource

__all__ = [
    'Closable', 'ShutdownConfig', 'ShutdownCoordinator', 'ShutdownCoordinatorFactory',
    'ShutdownError', 'ShutdownInProgressError', 'ShutdownTimeoutError',
    'ManualTriggerSource', 'SignalTriggerSource', 'TriggerSource', 'shutdown_hook'
]
