"""Tests for netspeed.util.rate."""

import pytest

from conftest import totals
from netspeed.data.network_speed import SpeedStats
from netspeed.util.rate import RateCalculator


class TestUpdate:
    def test_first_call_reports_zero(self):
        calculator = RateCalculator()
        stats = calculator.update(totals(5000, 1000), 42)
        assert stats == SpeedStats(0.0, 0.0, 0.0, 42)
        assert calculator.previous.totals == totals(5000, 1000)

    def test_rates(self):
        calculator = RateCalculator()
        calculator.update(totals(1000, 200), 10_000)
        stats = calculator.update(totals(4000, 1200), 12_000)
        assert stats.total_speed == pytest.approx(1500.0)
        assert stats.upload_speed == pytest.approx(500.0)
        assert stats.download_speed == pytest.approx(1000.0)
        assert stats.timestamp_millis == 12_000

    def test_irregular_intervals(self):
        calculator = RateCalculator()
        calculator.update(totals(0, 0), 0)
        assert calculator.update(totals(1000, 0), 500).total_speed == pytest.approx(2000.0)
        assert calculator.update(totals(4000, 0), 3500).total_speed == pytest.approx(1000.0)

    def test_counter_decrease_clamps_to_zero(self):
        calculator = RateCalculator()
        calculator.update(totals(10_000, 4000), 0)
        stats = calculator.update(totals(100, 50), 1000)
        assert stats.total_speed == 0.0
        assert stats.upload_speed == 0.0
        assert stats.download_speed == 0.0

    def test_download_clamps_when_upload_outgrows_total(self):
        calculator = RateCalculator()
        calculator.update(totals(1000, 100), 0)
        stats = calculator.update(totals(900, 600), 1000)
        assert stats.total_speed == 0.0
        assert stats.upload_speed == pytest.approx(500.0)
        assert stats.download_speed == 0.0

    def test_zero_elapsed_uses_minimum(self):
        calculator = RateCalculator()
        calculator.update(totals(0, 0), 1000)
        stats = calculator.update(totals(1, 0), 1000)
        assert stats.total_speed == pytest.approx(1000.0)

    def test_recovers_after_counter_reset(self):
        calculator = RateCalculator()
        calculator.update(totals(10_000, 0), 0)
        calculator.update(totals(0, 0), 1000)
        stats = calculator.update(totals(2000, 0), 2000)
        assert stats.total_speed == pytest.approx(2000.0)


class TestTotalSinceReset:
    def test_defaults_to_all_bytes(self):
        assert RateCalculator().total_since_reset(totals(1500, 500)) == 1500

    def test_reset_baseline(self):
        calculator = RateCalculator()
        calculator.reset_baseline(totals(1500, 500))
        assert calculator.total_since_reset(totals(1500, 500)) == 0
        assert calculator.total_since_reset(totals(4000, 900)) == 2500

    def test_never_negative(self):
        calculator = RateCalculator()
        calculator.reset_baseline(totals(1500, 500))
        assert calculator.total_since_reset(totals(100, 0)) == 0

    def test_instances_are_independent(self):
        first, second = RateCalculator(), RateCalculator()
        first.update(totals(1000, 0), 0)
        assert second.previous is None
        assert second.update(totals(5000, 0), 1000).total_speed == 0.0
