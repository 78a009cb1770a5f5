import asyncio
from typing import Optional, Sequence

from ...logging import BaseLogger
from ...shutdown import ShutdownConfig, ShutdownCoordinator, TriggerSource
from ..process import ProcessService


class RunCommand:
    """Command class for supervising child processes until shutdown."""
    
    def __init__(
        self,
        logger: Optional[BaseLogger],
        parallel: bool = False,
        timeout: Optional[float] = None,
        grace: float = 5.0,
        trigger_source: Optional[TriggerSource] = None
    ):
        """
        Initialize the run command.
        
        Args:
            logger: Logger instance, None for no output
            parallel: Whether to stop processes concurrently
            timeout: Seconds to wait for all processes to stop
            grace: Seconds each process gets between SIGTERM and SIGKILL
            trigger_source: Trigger source override, defaults to OS signals
        """
        self.logger = logger
        self.parallel = parallel
        self.timeout = timeout
        self.grace = grace
        self.trigger_source = trigger_source

    def run(self, commands: Sequence[str]) -> None:
        """Run the commands until a signal arrives or all of them exit."""
        asyncio.run(self._run(commands))

    async def _run(self, commands: Sequence[str]) -> None:
        config = ShutdownConfig(logger=self.logger, parallel=self.parallel)
        logger = config.resolve_logger()
        services = [ProcessService(command, grace=self.grace, logger=logger) for command in commands]
        coordinator = ShutdownCoordinator(services=services, config=config, trigger_source=self.trigger_source)

        # Closing a process that never started is a no-op
        started = []
        for service in services:
            if coordinator.closed:
                break
            try:
                await service.start()
            except Exception as e:
                coordinator.logger.log_error(f"Failed to start {service.command}: {e}", e)
                await coordinator.shutdown(self.timeout)
                raise
            started.append(service)

        triggered = asyncio.ensure_future(coordinator.wait())
        exited = asyncio.ensure_future(asyncio.gather(*(s.wait_exit() for s in started)))
        await asyncio.wait({triggered, exited}, return_when=asyncio.FIRST_COMPLETED)

        if not coordinator.closed:
            coordinator.logger.log_info("All processes exited")

        try:
            await coordinator.shutdown(self.timeout)
        finally:
            triggered.cancel()
            exited.cancel()
            await asyncio.gather(triggered, exited, return_exceptions=True)
