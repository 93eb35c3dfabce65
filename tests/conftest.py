"""Shared test fixtures for netspeed tests."""

from __future__ import annotations

import textwrap

import pytest

from netspeed.data.network_speed import AggregatedTotals
from netspeed.util.config import ConfigStore

PROC_NET_DEV = textwrap.dedent("""\
    Inter-|   Receive                                                |  Transmit
     face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
        lo:  999999     100    0    0    0     0          0         0   999999     100    0    0    0     0       0          0
      eth0:    1000      10    0    0    0     0          0         0      500       5    0    0    0     0       0          0
""")


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep config, cache and pidfiles inside the test's tmp directory."""
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("NETSPEED_CONFIG", raising=False)


@pytest.fixture
def proc_net_dev(tmp_path):
    """Write a two-interface statistics table and return its path."""
    path = tmp_path / "dev"
    path.write_text(PROC_NET_DEV)
    return path


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "netspeed" / "config.json"


@pytest.fixture
def config_store(config_path):
    return ConfigStore(config_path)


class FakeReader:
    """A StatsReader stand-in returning queued totals, or raising queued errors."""

    def __init__(self, *samples: AggregatedTotals | Exception):
        self.samples = list(samples)
        self.last = AggregatedTotals()

    def sample(self) -> AggregatedTotals:
        if self.samples:
            item = self.samples.pop(0)
            if isinstance(item, Exception):
                raise item
            self.last = item
        return self.last

    def interfaces(self) -> list[str]:
        return ["eth0"]


class FakeClock:
    def __init__(self, start: int = 1_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        current = self.now
        self.now += self.step
        return current


def totals(total: int, upload: int) -> AggregatedTotals:
    return AggregatedTotals(
        total_bytes=total, upload_bytes=upload, download_bytes=total - upload
    )
