from typing import Optional, Tuple
import click

from src.modules.shutdown import ShutdownTimeoutError
from src.modules.supervisor.command.run import RunCommand

def create_run_commands() -> click.Command:
    """Create the run command."""

    @click.command(name="run")
    @click.option("-c", "--command", "commands", multiple=True, required=True,
                  help="Shell command to supervise (repeatable)")
    @click.option("--parallel", is_flag=True, help="Stop processes concurrently instead of in order")
    @click.option("--timeout", type=float, default=None, help="Seconds to wait for all processes to stop")
    @click.option("--grace", type=float, default=5.0, help="Seconds between SIGTERM and SIGKILL per process")
    @click.pass_context
    def run(
        ctx,
        commands: Tuple[str, ...],
        parallel: bool,
        timeout: Optional[float],
        grace: float
    ):
        """Run commands and stop them gracefully on SIGINT/SIGTERM.
        
        Processes are stopped in the order given unless --parallel is set.
        """
        command = RunCommand(
            logger=ctx.obj.logger,
            parallel=parallel,
            timeout=timeout,
            grace=grace
        )
        
        try:
            command.run(commands)
        except ShutdownTimeoutError as e:
            raise click.ClickException(str(e))

    return run
