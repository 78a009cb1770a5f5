"""Shutdown coordinator for closing registered services exactly once."""

import asyncio
import inspect
from typing import Iterable, List, Optional, Tuple

from .closable import Closable, service_name
from .config import ShutdownConfig
from .errors import ShutdownInProgressError, ShutdownTimeoutError
from .triggers import SignalTriggerSource, TriggerSource


class ShutdownCoordinator:
    """Coordinates graceful shutdown of registered services.

    A shutdown is requested either by the trigger source (OS signals by
    default) or by calling :meth:`shutdown`. Whichever comes first starts the
    single closure pass; every later request observes that same pass.
    """
    
    def __init__(
        self,
        services: Iterable[Closable] = (),
        config: Optional[ShutdownConfig] = None,
        trigger_source: Optional[TriggerSource] = None
    ):
        """
        Initialize the shutdown coordinator.
        
        Args:
            services: Services to close, in closing order for sequential mode
            config: Logger and closing mode settings
            trigger_source: Where shutdown triggers come from, defaults to
                SIGINT/SIGTERM
        """
        self.config = config or ShutdownConfig()
        self.logger = self.config.resolve_logger()
        self.parallel = self.config.parallel
        self._services: List[Closable] = list(services)
        self._closed = False
        self._closing_task: Optional[asyncio.Task] = None
        self._initiated = asyncio.Event()
        self.trigger_source = trigger_source or SignalTriggerSource(
            self.config.resolve_signals(), self.logger
        )

        if not self._services:
            self.logger.log_warning("ShutdownCoordinator instantiated without any services to close.")

        self.trigger_source.subscribe(self._handle_trigger)
        self.logger.log_debug("Waiting for OS signals...")

    @property
    def closed(self) -> bool:
        """Check if shutdown has been triggered."""
        return self._closed

    @property
    def services(self) -> Tuple[Closable, ...]:
        return tuple(self._services)

    def add_service(self, service: Closable) -> None:
        """Register a service to close on shutdown.
        
        Raises:
            ShutdownInProgressError: If the closure pass has already started
        """
        if self._closed:
            raise ShutdownInProgressError(
                f"Cannot add service {service_name(service)}: shutdown already started"
            )
        self._services.append(service)

    def _handle_trigger(self, source: str) -> None:
        self._begin_closure(source)

    def _begin_closure(self, source: str) -> asyncio.Task:
        if self._closing_task is not None:
            return self._closing_task

        # Fails before any state changes when called outside an event loop
        loop = asyncio.get_running_loop()

        self._initiated.set()
        self._closed = True
        self.logger.log_info(f"Graceful shutdown initiated by {source}.")
        self.trigger_source.unsubscribe()
        self._closing_task = loop.create_task(self._close_services(list(self._services)))
        return self._closing_task

    async def _close_services(self, services: List[Closable]) -> None:
        if self.parallel:
            await asyncio.gather(
                *(self._close_service(service) for service in services),
                return_exceptions=True
            )
        else:
            for service in services:
                await self._close_service(service)
        self.logger.log_info("Graceful shutdown completed")

    async def _close_service(self, service: Closable) -> None:
        name = service_name(service)
        self.logger.log_debug(f"Closing service: {name}", service=name)
        try:
            result = service.close()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError as e:
            # Only a cancellation of the closing task itself stops the pass
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            self._log_close_error(name, e)
        except Exception as e:
            self._log_close_error(name, e)

    def _log_close_error(self, name: str, error: BaseException) -> None:
        message = str(error) or type(error).__name__
        self.logger.log_error(f"Error closing service: {message}", error, service=name)

    async def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Trigger shutdown and wait for every service to be closed.

        A timeout only bounds how long the caller waits; services that are
        still closing when it expires keep running in the background. The
        pass needs at least one turn of the event loop, so a timeout of 0
        only succeeds once the pass has already finished.
        
        Args:
            timeout: Seconds to wait for the closure pass, or None to wait
                indefinitely
            
        Raises:
            ShutdownTimeoutError: If the closure pass outlives the timeout
        """
        self.logger.log_info("Shutdown initiated programmatically")
        closing = self._begin_closure("programmatic call")

        if timeout is None or closing.done():
            try:
                await asyncio.shield(closing)
            except Exception as e:
                self.logger.log_error(f"Shutdown failed: {e}", e)
                raise
            return

        try:
            await asyncio.wait_for(asyncio.shield(closing), timeout=timeout)
        except asyncio.TimeoutError:
            error = ShutdownTimeoutError(timeout)
            self.logger.log_error(f"Shutdown failed: {error}", error)
            raise error from None
        except Exception as e:
            self.logger.log_error(f"Shutdown failed: {e}", e)
            raise

    async def wait(self) -> None:
        """Wait until shutdown has been triggered and the closure pass has settled."""
        await self._initiated.wait()
        if self._closing_task is not None:
            await asyncio.wait({self._closing_task})
