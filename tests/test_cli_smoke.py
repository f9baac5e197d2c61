"""Smoke tests for CLI commands.

Runs every command through Click's CliRunner against a fake LED tree, with
the config and log files redirected into the test's temporary directory.
"""

import json
import logging

import pytest
from click.testing import CliRunner

from ledctl.cli.main import cli, setup_logging


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, leds_root, tmp_path):
    """Invoke the CLI against the fake LED root."""
    base_args = [
        "--root", str(leds_root),
        "--config", str(tmp_path / "config.json"),
        "--log-file", str(tmp_path / "ledctl.log"),
    ]

    def run(*args, **kwargs):
        return runner.invoke(cli, base_args + list(args), **kwargs)

    return run


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Control Linux LED class devices" in result.output
        assert "--root" in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", [
        "list", "info", "on", "off", "brightness", "trigger", "blink", "morse", "reset", "config",
    ])
    def test_command_help(self, invoke, command):
        result = invoke(command, "--help")
        assert result.exit_code == 0


@pytest.mark.integration
class TestDeviceCommands:
    """Test list and info."""

    def test_list(self, invoke):
        result = invoke("list")

        assert result.exit_code == 0
        assert "green:led0" in result.output
        assert "red:led1" in result.output
        assert "not-a-led" not in result.output
        assert "trigger: mmc0" in result.output

    def test_list_empty_root(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "--root", str(tmp_path / "none"),
            "--config", str(tmp_path / "config.json"),
            "--log-file", str(tmp_path / "ledctl.log"),
            "list",
        ])

        assert result.exit_code == 0
        assert "No LEDs found" in result.output

    def test_info(self, invoke):
        result = invoke("info", "green:led0")

        assert result.exit_code == 0
        assert "Brightness: 0 (range 0-255)" in result.output
        assert "Trigger:    none" in result.output
        assert "morse" in result.output

    def test_info_unknown_led(self, invoke):
        result = invoke("info", "blue:led9")

        assert result.exit_code == 1
        assert "No such LED: 'blue:led9'" in result.output
        assert "Available LEDs: green:led0, red:led1" in result.output

    def test_info_without_led_is_ambiguous(self, invoke):
        result = invoke("info")
        assert result.exit_code == 1


@pytest.mark.integration
class TestControlCommands:
    """Test brightness, trigger and reset commands."""

    def test_on_and_off(self, invoke, leds_root):
        result = invoke("on", "green:led0")
        assert result.exit_code == 0
        assert (leds_root / "green:led0" / "brightness").read_text() == "255"

        result = invoke("off", "green:led0")
        assert result.exit_code == 0
        assert (leds_root / "green:led0" / "brightness").read_text() == "0"

    def test_brightness_clamped(self, invoke, leds_root):
        result = invoke("brightness", "red:led1", "9")

        assert result.exit_code == 0
        assert (leds_root / "red:led1" / "brightness").read_text() == "1"

    def test_brightness_not_a_number(self, invoke):
        result = invoke("brightness", "green:led0", "bright")

        assert result.exit_code == 1
        assert "Brightness must be a number" in result.output

    def test_trigger_list(self, invoke):
        result = invoke("trigger", "green:led0")

        assert result.exit_code == 0
        assert "[none] timer heartbeat default-on" in result.output

    def test_trigger_set(self, invoke, leds_root):
        result = invoke("trigger", "green:led0", "timer")

        assert result.exit_code == 0
        assert (leds_root / "green:led0" / "trigger").read_text() == "timer"

    def test_trigger_unsupported(self, invoke):
        result = invoke("trigger", "green:led0", "disco")

        assert result.exit_code == 1
        assert "Unsupported trigger: 'disco'" in result.output
        assert "Supported triggers: none, timer, heartbeat, default-on" in result.output

    def test_reset(self, invoke, leds_root):
        (leds_root / "green:led0" / "brightness").write_text("200")

        result = invoke("reset", "green:led0")

        assert result.exit_code == 0
        assert (leds_root / "green:led0" / "brightness").read_text() == "0"

    def test_default_led_from_config(self, invoke, tmp_path, leds_root):
        (tmp_path / "config.json").write_text(json.dumps({"default_led": "red:led1"}))

        result = invoke("on")

        assert result.exit_code == 0
        assert (leds_root / "red:led1" / "brightness").read_text() == "1"


@pytest.mark.integration
class TestBlinkCommands:
    """Test blink and morse."""

    def test_blink(self, invoke, leds_root):
        result = invoke("blink", "green:led0", "--period", "40", "--count", "2")

        assert result.exit_code == 0
        assert "blinked 2x" in result.output
        assert (leds_root / "green:led0" / "brightness").read_text() == "0"

    def test_blink_invalid_duty(self, invoke):
        result = invoke("blink", "green:led0", "--duty", "150")
        assert result.exit_code == 2

    def test_morse(self, invoke):
        result = invoke("morse", "green:led0", "e e", "--rate", "50")

        assert result.exit_code == 0
        assert "Sending: .w." in result.output
        assert "sent" in result.output

    def test_morse_nothing_to_send(self, invoke):
        result = invoke("morse", "green:led0", "###")
        assert result.exit_code == 2


@pytest.mark.integration
class TestConfigCommands:
    """Test config subcommands."""

    def test_show_defaults(self, invoke):
        result = invoke("config", "show")

        assert result.exit_code == 0
        assert "not created yet" in result.output
        assert "blink_rate: 1.0" in result.output

    def test_path(self, invoke, tmp_path):
        result = invoke("config", "path")

        assert result.exit_code == 0
        assert str(tmp_path / "config.json") in result.output

    def test_show_invalid_config(self, invoke, tmp_path):
        (tmp_path / "config.json").write_text('{"blink_rate": 0}')

        result = invoke("config", "show")

        assert result.exit_code == 1
        assert "blink_rate" in result.output

    def test_set(self, invoke, tmp_path):
        result = invoke("config", "set", "--default-led", "red:led1", "--blink-rate", "2")

        assert result.exit_code == 0
        saved = json.loads((tmp_path / "config.json").read_text())
        assert saved["default_led"] == "red:led1"
        assert saved["blink_rate"] == 2.0

    def test_set_rejects_invalid_value(self, invoke, tmp_path):
        result = invoke("config", "set", "--blink-rate", "-1")

        assert result.exit_code == 1
        assert "blink_rate" in result.output
        assert not (tmp_path / "config.json").exists()

    def test_set_without_options(self, invoke):
        result = invoke("config", "set")
        assert result.exit_code == 2

    def test_restore(self, invoke, tmp_path):
        invoke("config", "set", "--blink-rate", "2")
        invoke("config", "set", "--blink-rate", "3")

        result = invoke("config", "restore")

        assert result.exit_code == 0
        assert json.loads((tmp_path / "config.json").read_text())["blink_rate"] == 2.0

    def test_restore_without_backup(self, invoke):
        result = invoke("config", "restore")
        assert result.exit_code == 1

    def test_reset_repairs_invalid_config(self, invoke, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text("{broken")

        result = invoke("config", "reset", "--yes")

        assert result.exit_code == 0
        assert json.loads(config_path.read_text())["blink_rate"] == 1.0
        assert config_path.with_suffix(".json.bak").read_text() == "{broken"


@pytest.fixture
def ledctl_handlers():
    """Remove log handlers installed by setup_logging after the test."""
    root_logger = logging.getLogger()
    yield root_logger
    for handler in [h for h in root_logger.handlers if getattr(h, "_ledctl", False)]:
        root_logger.removeHandler(handler)
        handler.close()


@pytest.mark.unit
class TestSetupLogging:
    """Test log handler installation."""

    def test_handlers_are_replaced_not_stacked(self, ledctl_handlers, tmp_path):
        others = [h for h in ledctl_handlers.handlers if not getattr(h, "_ledctl", False)]

        setup_logging(1, False, tmp_path / "a.log", "DEBUG")
        path = setup_logging(1, False, tmp_path / "b.log", "WARNING")

        ours = [h for h in ledctl_handlers.handlers if getattr(h, "_ledctl", False)]
        assert path == tmp_path / "b.log"
        assert len(ours) == 2
        assert all(h.level == logging.WARNING for h in ours)
        assert len(ledctl_handlers.handlers) == len(others) + 2

    def test_default_location_uses_log_dir(self, ledctl_handlers, tmp_path):
        path = setup_logging(0, False, None, "INFO", tmp_path / "logs")
        assert path == tmp_path / "logs" / "ledctl.log"
