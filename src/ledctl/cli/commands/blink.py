"""Blink and morse commands."""

from typing import Optional

import click

from ledctl.encoders import to_symbols


@click.command()
@click.argument("led")
@click.option("--rate", "-r", type=float, default=None, help="Speed multiplier (default: blink_rate from config)")
@click.option("--duty", "-d", type=click.FloatRange(0, 100), default=50.0, show_default=True,
              help="Percentage of the period the LED is on")
@click.option("--period", "-p", type=click.FloatRange(min=0), default=1000.0, show_default=True,
              help="Period in milliseconds")
@click.option("--count", "-n", type=click.IntRange(min=1), default=1, show_default=True,
              help="Number of blinks")
@click.pass_obj
def blink(session, led: str, rate: Optional[float], duty: float, period: float, count: int):
    """Blink an LED and wait until it is done."""
    descriptor = {"rate": rate, "duty_percent": duty, "period_ms": period}

    with session.open_led(led) as handle:
        for _ in range(count):
            handle.blocking.blink(descriptor).raise_for_error()
        click.echo(f"{handle.id}: blinked {count}x")


@click.command()
@click.argument("led")
@click.argument("text")
@click.option("--rate", "-r", type=float, default=None, help="Speed multiplier (default: blink_rate from config)")
@click.pass_obj
def morse(session, led: str, text: str, rate: Optional[float]):
    """
    Blink TEXT in morse code.

    Characters without a morse representation are skipped.
    """
    symbols = "".join(symbol.value for symbol in to_symbols(text))
    if not symbols:
        raise click.BadParameter("nothing to send", param_hint="TEXT")

    click.echo(f"Sending: {symbols}")
    with session.open_led(led) as handle:
        handle.blocking.encode("morse", text, rate=rate).raise_for_error()
        click.echo(f"{handle.id}: sent")
