"""Tests for data models."""

import pytest
from pydantic import ValidationError

from ledctl.models import AppConfig, BlinkDescriptor, BrightnessBounds, TriggerInfo


@pytest.mark.unit
class TestBlinkDescriptor:
    """Test BlinkDescriptor model."""

    def test_defaults(self):
        blink = BlinkDescriptor()
        assert blink.rate is None
        assert blink.duty_percent == 50
        assert blink.period_ms == 1000
        assert blink.timings() == (500.0, 500.0)

    def test_timings_apply_duty_and_rate(self):
        """period / rate is split by duty cycle."""
        blink = BlinkDescriptor(rate=2, duty_percent=75, period_ms=2000)
        assert blink.effective_period() == 1000
        assert blink.timings() == (750.0, 250.0)

    @pytest.mark.parametrize("rate", [None, 0, -3])
    def test_non_positive_rate_uses_default(self, rate):
        blink = BlinkDescriptor(rate=rate, period_ms=1000)
        assert blink.effective_period(default_rate=2.0) == 500

    def test_duty_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            BlinkDescriptor(duty_percent=101)
        with pytest.raises(ValidationError):
            BlinkDescriptor(duty_percent=-1)

    def test_negative_period_rejected(self):
        with pytest.raises(ValidationError):
            BlinkDescriptor(period_ms=-1)

    def test_frozen(self):
        blink = BlinkDescriptor()
        with pytest.raises(ValidationError):
            blink.duty_percent = 10

    def test_coerce_mapping_with_short_keys(self):
        """'for' and 'of' are accepted as duty and period."""
        blink = BlinkDescriptor.coerce({"for": 75, "of": 2000})
        assert blink.duty_percent == 75
        assert blink.period_ms == 2000

    def test_coerce_camel_case_keys(self):
        blink = BlinkDescriptor.coerce({"dutyPercent": 10, "periodMs": 300})
        assert (blink.duty_percent, blink.period_ms) == (10, 300)

    def test_coerce_passthrough_and_none(self):
        blink = BlinkDescriptor(period_ms=10)
        assert BlinkDescriptor.coerce(blink) is blink
        assert BlinkDescriptor.coerce(None) == BlinkDescriptor()

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            BlinkDescriptor.coerce("fast")


@pytest.mark.unit
class TestBrightnessBounds:
    """Test BrightnessBounds."""

    def test_clamp(self):
        bounds = BrightnessBounds(255, lambda: 0)
        assert bounds.clamp(-5) == 0
        assert bounds.clamp(100) == 100
        assert bounds.clamp(300) == 255

    def test_current_is_read_live(self):
        values = iter([1, 2])
        bounds = BrightnessBounds(10, lambda: next(values))

        assert bounds.current == 1
        assert bounds.current == 2
        assert (bounds.min, bounds.max) == (0, 10)


@pytest.mark.unit
class TestTriggerInfo:
    """Test parsing of the trigger file."""

    def test_parse_bracketed_current(self):
        info = TriggerInfo.parse("none [timer] heartbeat default-on")
        assert info.current == "timer"
        assert info.all == ("none", "timer", "heartbeat", "default-on")

    def test_parse_without_current(self):
        info = TriggerInfo.parse("none timer")
        assert info.current is None
        assert info.supports("timer")
        assert not info.supports("[timer]")

    def test_parse_empty(self):
        info = TriggerInfo.parse("")
        assert info.all == ()
        assert not info.supports("none")


@pytest.mark.unit
class TestAppConfig:
    """Test AppConfig model."""

    def test_defaults(self):
        config = AppConfig()
        assert str(config.leds_root) == "/sys/class/leds"
        assert config.default_led is None
        assert config.blink_rate == 1.0

    def test_blink_rate_must_be_positive(self):
        with pytest.raises(ValidationError):
            AppConfig(blink_rate=0)

    def test_paths_serialize_as_strings(self, tmp_path):
        config = AppConfig(leds_root=tmp_path)
        data = config.model_dump(mode="json")
        assert data["leds_root"] == str(tmp_path)
        assert isinstance(data["log_dir"], str)
