"""Pytest fixtures for tests."""

import threading
from pathlib import Path

import pytest

from ledctl.controller import LEDController
from ledctl.sysfs import DeviceRegistry


def make_led(root: Path, name: str, max_brightness: int = 255, trigger: str = "[none] timer heartbeat default-on",
             brightness: int = 0) -> Path:
    """Create a fake LED class directory."""
    location = root / name
    location.mkdir(parents=True)
    (location / "max_brightness").write_text(f"{max_brightness}\n")
    (location / "trigger").write_text(f"{trigger}\n")
    (location / "brightness").write_text(f"{brightness}\n")
    return location


class Recorder:
    """Completion callback that records its calls and can be waited on."""

    def __init__(self):
        self.calls: list = []
        self._event = threading.Event()

    def __call__(self, error=None):
        self.calls.append(error)
        self._event.set()

    def wait(self, timeout: float = 2.0) -> bool:
        return self._event.wait(timeout)

    @property
    def error(self):
        return self.calls[0] if self.calls else None


@pytest.fixture
def leds_root(tmp_path):
    """Fake /sys/class/leds with two LEDs and some noise."""
    root = tmp_path / "leds"
    make_led(root, "green:led0")
    make_led(root, "red:led1", max_brightness=1, trigger="none [mmc0] timer")
    (root / "not-a-led").mkdir()
    (root / "not-a-led" / "brightness").write_text("0\n")
    (root / "README").write_text("stray file\n")
    return root


@pytest.fixture
def registry(leds_root):
    """Registry over the fake LED root."""
    return DeviceRegistry(leds_root)


@pytest.fixture
def led(registry):
    """Controller for green:led0, closed after the test."""
    controller = LEDController("green:led0", registry=registry)
    yield controller
    controller.close()


@pytest.fixture
def recorder():
    """Fresh completion recorder."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for additional recorders."""
    return Recorder
