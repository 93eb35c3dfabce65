"""Tests for netspeed.monitor."""

import pytest

from conftest import FakeClock, FakeReader, totals
from netspeed.data.network_speed import DisplayMode
from netspeed.monitor import LEFT_BUTTON, MIDDLE_BUTTON, RIGHT_BUTTON, Monitor


@pytest.fixture
def make_monitor(config_store):
    def factory(*samples):
        return Monitor(config_store, reader=FakeReader(*samples), clock=FakeClock())

    return factory


class TestTick:
    def test_first_tick_is_zero(self, make_monitor):
        monitor = make_monitor(totals(1500, 500))
        reading = monitor.tick()
        assert reading.success is True
        assert reading.text == "0bps"
        assert reading.mode == DisplayMode.TOTAL_BPS

    def test_second_tick_reports_rate(self, make_monitor):
        monitor = make_monitor(totals(0, 0), totals(1500, 500))
        monitor.tick(DisplayMode.SPLIT_BYTES)
        reading = monitor.tick(DisplayMode.SPLIT_BYTES)
        assert reading.text == "↓1.00K/s ↑500B/s"
        assert reading.stats.total_speed == pytest.approx(1500.0)

    def test_uses_configured_mode(self, config_store, make_monitor):
        config_store.set_mode(DisplayMode.TOTAL_BYTES)
        monitor = make_monitor(totals(0, 0), totals(2000, 0))
        monitor.tick()
        assert monitor.tick().text == "⇅2.00K/s"

    def test_total_downloaded(self, make_monitor):
        monitor = make_monitor(totals(1500, 500))
        reading = monitor.tick(DisplayMode.TOTAL_DOWNLOADED)
        assert reading.text == "∑ 1.50KB"
        assert reading.total_since_reset == 1500

    def test_read_failure_is_reported_and_recoverable(self, make_monitor):
        monitor = make_monitor(OSError("boom"), totals(1000, 0))
        reading = monitor.tick()
        assert reading.success is False
        assert "Error" in reading.text
        assert "boom" in reading.error

        assert monitor.tick().success is True


class TestClick:
    def test_left_click_cycles_mode(self, config_store, make_monitor):
        monitor = make_monitor(totals(0, 0))
        assert monitor.click(LEFT_BUTTON) is True
        assert config_store.mode == DisplayMode.TOTAL_BYTES

    def test_middle_click_cycles_font_mode(self, config_store, make_monitor):
        monitor = make_monitor(totals(0, 0))
        assert monitor.click(MIDDLE_BUTTON) is True
        assert config_store.font_mode == 1

    def test_right_click_ignored_outside_cumulative_mode(self, make_monitor):
        monitor = make_monitor(totals(1500, 500), totals(1500, 500))
        assert monitor.click(RIGHT_BUTTON) is False
        assert monitor.calculator.baseline == 0

    def test_right_click_resets_total(self, config_store, make_monitor):
        config_store.set_mode(DisplayMode.TOTAL_DOWNLOADED)
        monitor = make_monitor(totals(1500, 500), totals(1500, 500), totals(4000, 500))
        assert monitor.tick().text == "∑ 1.50KB"
        assert monitor.click(RIGHT_BUTTON) is True
        assert monitor.tick().text == "∑ 2.50KB"

    def test_right_click_read_failure(self, config_store, make_monitor):
        config_store.set_mode(DisplayMode.TOTAL_DOWNLOADED)
        monitor = make_monitor(OSError("gone"))
        assert monitor.click(RIGHT_BUTTON) is False

    def test_unknown_button(self, make_monitor):
        assert make_monitor(totals(0, 0)).click(8) is False


class TestStyleClass:
    @pytest.mark.parametrize(
        "mode,font_mode,expected",
        [
            (0, 0, "netspeed-label"),
            (1, 2, "netspeed-label-2"),
            (2, 0, "netspeed-label-wide"),
            (3, 4, "netspeed-label-wide-4"),
            (4, 1, "netspeed-label-1"),
        ],
    )
    def test_style_class(self, config_store, make_monitor, mode, font_mode, expected):
        config_store.set_mode(mode)
        config_store.set_font_mode(font_mode)
        assert make_monitor(totals(0, 0)).style_class() == expected


class TestTooltip:
    def test_success(self, make_monitor):
        monitor = make_monitor(totals(0, 0), totals(1500, 500))
        monitor.tick()
        tooltip = monitor.tooltip(monitor.tick())
        lines = tooltip.split("\n")
        assert lines[0] == "Total net speed in bits per second"
        assert "Download   : 1.00K/s" in lines
        assert "Upload     : 500B/s" in lines
        assert "Total      : 1.50KB" in lines
        assert "Interfaces : eth0" in lines
        assert lines[-1].startswith("Last updated ")

    def test_failure(self, make_monitor):
        monitor = make_monitor(OSError("boom"))
        assert "boom" in monitor.tooltip(monitor.tick())
