import click
from src.modules.supervisor.commands import create_run_commands
from src.modules.logging import create_logger


class GracedownContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger = None

pass_context = click.make_pass_decorator(GracedownContext, ensure=True)

@click.group()
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='colorful',
              help='Output format (colorful for CLI, plain for CI/file, json for machine parsing)',
              envvar='GRACEDOWN_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='GRACEDOWN_LOG_LEVEL')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all log output')
@pass_context
def cli(ctx, output, log_level, quiet):
    """Gracedown CLI Tool: graceful shutdown for supervised processes."""
    ctx.logger = None if quiet else create_logger(output, log_level)

# Add commands
cli.add_command(create_run_commands())

def main():
    cli()

if __name__ == '__main__':
    main()
