import asyncio
from typing import Optional

from ..logging import BaseLogger, NoOpLogger


class ProcessService:
    """A child process that is terminated when closed."""

    def __init__(self, command: str, grace: float = 5.0, logger: Optional[BaseLogger] = None):
        """
        Args:
            command: Shell command to run
            grace: Seconds to wait after SIGTERM before killing the process
            logger: Logger instance
        """
        self.command = command
        self.grace = grace
        self.logger = logger or NoOpLogger()
        self.process: Optional[asyncio.subprocess.Process] = None

    @property
    def name(self) -> str:
        if self.process is not None:
            return f"{self.command} (pid {self.process.pid})"
        return self.command

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.returncode is None

    async def start(self) -> None:
        self.process = await asyncio.create_subprocess_shell(self.command)
        self.logger.log_info(f"Started {self.name}")

    async def wait_exit(self) -> int:
        """Wait for the process to exit and return its exit code."""
        if self.process is None:
            raise RuntimeError(f"Process not started: {self.command}")
        return await self.process.wait()

    async def close(self) -> None:
        if not self.running:
            return

        try:
            self.process.terminate()
        except ProcessLookupError:
            # Exited but not reaped yet
            pass
        try:
            await asyncio.wait_for(self.process.wait(), timeout=self.grace)
        except asyncio.TimeoutError:
            self.logger.log_warning(
                f"{self.name} did not exit within {self.grace} seconds, killing it"
            )
            self.process.kill()
            await self.process.wait()
        self.logger.log_info(f"Stopped {self.name}", returncode=self.process.returncode)
