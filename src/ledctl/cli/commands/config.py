"""Configuration commands.

Commands:
    - config show       # Display configuration
    - config path       # Print the config file location
    - config set ...    # Update one or more settings
    - config reset      # Restore defaults
    - config restore    # Roll back to the .bak file
"""

from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from ledctl.exceptions import wrap_pydantic_error
from ledctl.models import AppConfig


@click.group(name="config")
def config():
    """View or change ledctl settings."""
    pass


@config.command(name="show")
@click.pass_obj
def show_config(session):
    """Display the current configuration."""
    settings = session.config
    click.echo(f"Config file: {session.config_path}"
               + ("" if session.config_path.exists() else " (not created yet, showing defaults)"))
    click.echo()
    for name, value in settings.model_dump(mode="json").items():
        click.echo(f"  {name}: {value}")


@config.command(name="path")
@click.pass_obj
def config_path(session):
    """Print the config file location."""
    click.echo(str(session.config_path))


@config.command(name="set")
@click.option("--leds-root", type=click.Path(path_type=Path), help="LED class directory")
@click.option("--default-led", help="LED used when a command does not name one")
@click.option("--blink-rate", type=float, help="Default blink speed multiplier")
@click.option("--log-dir", type=click.Path(path_type=Path), help="Directory for log files")
@click.pass_obj
def set_config(session, leds_root: Optional[Path], default_led: Optional[str],
               blink_rate: Optional[float], log_dir: Optional[Path]):
    """Update settings and save them."""
    changes = {
        name: value
        for name, value in (
            ("leds_root", leds_root),
            ("default_led", default_led),
            ("blink_rate", blink_rate),
            ("log_dir", log_dir),
        )
        if value is not None
    }
    if not changes:
        raise click.UsageError("Give at least one setting to change")

    try:
        settings = session.config.updated(**changes)
    except ValidationError as e:
        raise wrap_pydantic_error(e, str(session.config_path)) from e

    settings.save(session.config_path)
    for name in changes:
        click.echo(f"  {name}: {settings.model_dump(mode='json')[name]}")


@config.command(name="reset")
@click.confirmation_option(prompt="Reset configuration to defaults?")
@click.pass_obj
def reset_config(session):
    """Overwrite the config file with defaults (the old file is kept as .bak)."""
    AppConfig().save(session.config_path)
    click.echo(f"Configuration reset: {session.config_path}")


@config.command(name="restore")
@click.pass_obj
def restore_config(session):
    """Replace the config file with its .bak copy."""
    store = AppConfig.file(session.config_path)
    if not store.backup_path.exists():
        raise click.ClickException(f"No backup found at {store.backup_path}")
    store.restore_backup()
    click.echo(f"Configuration restored from {store.backup_path}")
