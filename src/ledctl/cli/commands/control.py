"""Brightness and trigger commands."""

from typing import Optional

import click


@click.command()
@click.argument("led", required=False)
@click.pass_obj
def on(session, led: Optional[str]):
    """Switch an LED to full brightness."""
    with session.open_led(led) as handle:
        handle.blocking.turn_on().raise_for_error()
        click.echo(f"{handle.id}: on ({handle.current_value()})")


@click.command()
@click.argument("led", required=False)
@click.pass_obj
def off(session, led: Optional[str]):
    """Switch an LED off."""
    with session.open_led(led) as handle:
        handle.blocking.turn_off().raise_for_error()
        click.echo(f"{handle.id}: off")


@click.command()
@click.argument("led")
@click.argument("value")
@click.pass_obj
def brightness(session, led: str, value: str):
    """
    Set the brightness of an LED.

    VALUE is clamped into the LED's range (0 to max_brightness).
    """
    with session.open_led(led) as handle:
        handle.blocking.set_brightness(value).raise_for_error()
        click.echo(f"{handle.id}: brightness {handle.current_value()}/{handle.brightness.max}")


@click.command()
@click.argument("led")
@click.argument("value", required=False)
@click.pass_obj
def trigger(session, led: str, value: Optional[str]):
    """
    Show or set the kernel trigger of an LED.

    Without VALUE, lists the supported triggers with the active one in
    brackets.
    """
    with session.open_led(led) as handle:
        if value is None:
            triggers = handle.triggers
            click.echo(" ".join(
                f"[{name}]" if name == triggers.current else name for name in triggers.all
            ))
            return

        handle.blocking.set_trigger(value).raise_for_error()
        click.echo(f"{handle.id}: trigger {value}")


@click.command()
@click.argument("led", required=False)
@click.pass_obj
def reset(session, led: Optional[str]):
    """Cancel queued work and switch an LED off."""
    with session.open_led(led) as handle:
        handle.blocking.reset().raise_for_error()
        click.echo(f"{handle.id}: reset")
