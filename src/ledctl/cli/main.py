"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from ledctl import __version__
from ledctl.exceptions import format_error_for_display

from .commands import blink, brightness, config, info, list_leds, morse, off, on, reset, trigger
from .session import CliSession

logger = logging.getLogger(__name__)


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _resolve_level(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> int:
    if log_file:
        return getattr(logging, log_level.upper())
    if debug or verbose >= 2:
        return logging.DEBUG
    return logging.INFO if verbose == 1 else logging.WARNING


def setup_logging(
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
    log_dir: Optional[Path] = None,
) -> Path:
    """
    Install ledctl's log handlers on the root logger.

    A rotating file handler always records to `log_file`, to
    ./ledctl-debug.log with --debug, or to `<log_dir>/ledctl.log`. With -v or
    --debug, records are mirrored to stderr as well. Handlers installed by a
    previous call are replaced, not stacked.

    Returns:
        Path of the log file
    """
    level = _resolve_level(verbose, debug, log_file, log_level)

    if log_file:
        log_path = log_file
    elif debug:
        log_path = Path.cwd() / "ledctl-debug.log"
    else:
        log_dir = log_dir or Path.home() / ".ledctl" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "ledctl.log"

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, "_ledctl", False)]:
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handlers: list[logging.Handler] = [file_handler]

    if verbose or debug:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handlers.append(console_handler)

    for handler in handlers:
        handler._ledctl = True
        handler.setLevel(level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(level)}")
    return log_path


class LedCtlGroup(click.Group):
    """Command group that turns ledctl errors into a clean message and exit code 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            click.echo("\nInterrupted", err=True)
            ctx.exit(130)
        except Exception as e:
            logger.exception("Command failed")

            user_message, recovery_hint = format_error_for_display(e)
            click.echo(f"ERROR: {user_message}", err=True)
            if recovery_hint:
                click.echo(f"\n{recovery_hint}", err=True)

            log_path = ctx.meta.get("ledctl.log_path")
            if log_path:
                click.echo(f"\nFor details, check the log file: {log_path}", err=True)
            ctx.exit(1)


@click.group(cls=LedCtlGroup)
@click.version_option(version=__version__, prog_name="ledctl")
@click.option(
    '--root',
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help='LED class directory (default: leds_root from config, /sys/class/leds)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.ledctl/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./ledctl-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.pass_context
def cli(
    ctx: click.Context,
    root: Optional[Path],
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
):
    """
    Control Linux LED class devices.

    \b
    Examples:
      # List LEDs
      ledctl list

      # Switch an LED on and hand it back to the kernel heartbeat
      ledctl on green:led0
      ledctl trigger green:led0 heartbeat

      # Blink three times, twice as fast
      ledctl blink green:led0 --count 3 --rate 2

      # Send a message in morse code
      ledctl morse green:led0 "sos"

      # Use a fake LED tree
      ledctl --root ./fake-leds list
    """
    session = CliSession(config_path=config_path, root=root)
    ctx.obj = session

    log_dir = session.config_or_default().log_dir
    ctx.meta["ledctl.log_path"] = setup_logging(verbose, debug, log_file, log_level, log_dir)


cli.add_command(list_leds)
cli.add_command(info)
cli.add_command(on)
cli.add_command(off)
cli.add_command(brightness)
cli.add_command(trigger)
cli.add_command(reset)
cli.add_command(blink)
cli.add_command(morse)
cli.add_command(config)

if __name__ == "__main__":
    cli()
