"""Main entry point for ``python -m ledctl``."""

from ledctl.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="ledctl")
