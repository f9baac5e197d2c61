"""LED discovery and inspection commands."""

import logging
from typing import Optional

import click

from ledctl.controller import LEDController
from ledctl.exceptions import collect_errors

logger = logging.getLogger(__name__)


@click.command(name="list")
@click.pass_obj
def list_leds(session):
    """List LEDs with their brightness and active trigger."""
    registry = session.registry
    identifiers = registry.discover()

    if not identifiers:
        click.echo(f"No LEDs found in {registry.root}")
        return

    click.echo(f"LEDs in {registry.root}:\n")

    collector = collect_errors("read LED details")
    for identifier in identifiers:
        with collector.attempt(identifier):
            led = LEDController(identifier, registry=registry)
            try:
                bounds = led.brightness
                trigger = led.triggers.current or "-"
                click.echo(f"  {identifier:<32} {bounds.current:>4}/{bounds.max:<4}  trigger: {trigger}")
            finally:
                led.close()

    if collector.has_errors:
        click.echo("", err=True)
        click.echo(collector.get_summary(), err=True)


@click.command()
@click.argument("led", required=False)
@click.pass_obj
def info(session, led: Optional[str]):
    """Show details of an LED."""
    with session.open_led(led) as handle:
        bounds = handle.brightness
        triggers = handle.triggers

        click.echo(f"LED:        {handle.id}")
        click.echo(f"Location:   {handle.location}")
        click.echo(f"Brightness: {bounds.current} (range {bounds.min}-{bounds.max})")
        click.echo(f"Trigger:    {triggers.current or '-'}")
        click.echo(f"Triggers:   {' '.join(triggers.all) or '-'}")
        click.echo(f"Encoders:   {', '.join(LEDController.encoders.names()) or '-'}")
