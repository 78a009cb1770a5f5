"""Sources of shutdown triggers."""

import asyncio
import signal
import threading
import types
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional, Union

from ..logging import BaseLogger, NoOpLogger

TriggerCallback = Callable[[str], Any]

# Type for signal handlers
SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]


class TriggerSource(ABC):
    """Delivers shutdown requests to a single subscriber."""

    @abstractmethod
    def subscribe(self, callback: TriggerCallback) -> None:
        """Start delivering triggers to ``callback``."""
        pass

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering triggers. Safe to call more than once."""
        pass


class SignalTriggerSource(TriggerSource):
    """Turns OS signals into triggers on the running event loop."""

    def __init__(
        self,
        signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM),
        logger: Optional[BaseLogger] = None
    ):
        self.signals = list(signals)
        self.logger = logger or NoOpLogger()
        self._callback: Optional[TriggerCallback] = None
        self._original_handlers: Dict[signal.Signals, SignalHandlerType] = {}

    def subscribe(self, callback: TriggerCallback) -> None:
        """
        Install handlers for the configured signals.
        Signal handlers can only be installed from the main thread.
        """
        if threading.current_thread() is not threading.main_thread():
            self.logger.log_warning(
                "Signal handlers can only be installed from the main thread; "
                "shutdown will only be triggered programmatically"
            )
            return

        self._callback = callback
        for sig in self.signals:
            # Store original signal handlers to restore later
            self._original_handlers[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle_signal)

    def unsubscribe(self) -> None:
        """Restore original signal handlers."""
        self._callback = None
        if threading.current_thread() is not threading.main_thread():
            return
        for sig, original in self._original_handlers.items():
            if original is not None:
                signal.signal(sig, original)
        self._original_handlers.clear()

    def _handle_signal(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        """
        Handle termination signals. This is a synchronous method
        that will be called directly by the signal handler.
        
        Args:
            sig_num: The signal number that was received
            frame: The current stack frame
        """
        sig = signal.Signals(sig_num)
        callback = self._callback
        if callback is None:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            # Nothing can run the async closure; fall back to the previous behaviour
            original = self._original_handlers.get(sig)
            if callable(original):
                original(sig_num, frame)
            return

        self.logger.log_debug(f"Received {sig.name} signal")
        loop.call_soon_threadsafe(callback, f"signal {sig.name}")


class ManualTriggerSource(TriggerSource):
    """Trigger source fired from code, e.g. an admin endpoint or a test."""

    def __init__(self):
        self._callback: Optional[TriggerCallback] = None

    @property
    def subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: TriggerCallback) -> None:
        self._callback = callback

    def unsubscribe(self) -> None:
        self._callback = None

    def fire(self, source: str = "manual trigger") -> None:
        """Deliver a trigger to the subscriber, if any."""
        if self._callback is not None:
            self._callback(source)
