"""
Aggregate host network counters from /proc/net/dev.

Each interface line has the shape

    eth0: 1000 10 0 0 0 0 0 0  500 5 0 0 0 0 0 0

i.e. the interface name followed by eight receive and eight transmit
counters. Field 1 is received bytes and field 9 is transmitted bytes.
"""

import logging
import string
from pathlib import Path

from netspeed.data.network_speed import AggregatedTotals, InterfaceSample

logger = logging.getLogger(__name__)

PROC_NET_DEV = "/proc/net/dev"
MIN_FIELDS = 10

# Loopback and the virtual devices whose traffic is already counted on a
# physical interface: traffictoll, lxd, libvirt, bridges, vnet, tun, tap.
EXCLUDED_NAMES = ("lo",)
EXCLUDED_PREFIXES = ("ifb", "lxdbr", "virbr", "br", "vnet", "tun", "tap")


def _matches_exact(name: str, value: str) -> bool:
    return name == value


def _matches_numbered_prefix(name: str, prefix: str) -> bool:
    return (
        name.startswith(prefix)
        and len(name) > len(prefix)
        and name[len(prefix)] in string.digits
    )


INTERFACE_FILTER = [
    *((_matches_exact, value) for value in EXCLUDED_NAMES),
    *((_matches_numbered_prefix, prefix) for prefix in EXCLUDED_PREFIXES),
]


def is_excluded_interface(name: str) -> bool:
    for matcher, value in INTERFACE_FILTER:
        if matcher(name, value):
            return True
    return False


def _split_fields(line: str) -> list[str]:
    name, _, counters = line.partition(":")
    return [name.strip(), *counters.split()]


def parse_stats(content: str) -> list[InterfaceSample]:
    """
    Parse the statistics table into one sample per interface. Header lines and
    lines with non-numeric byte counters are skipped.
    """
    samples: list[InterfaceSample] = []
    for line in content.splitlines():
        if ":" not in line:
            continue

        fields = _split_fields(line)
        if len(fields) < MIN_FIELDS or not fields[0]:
            continue

        try:
            received = int(fields[1])
            transmitted = int(fields[9])
        except ValueError:
            logger.debug(f"skipping unparseable line: {line.strip()}")
            continue

        samples.append(
            InterfaceSample(
                name=fields[0],
                received_bytes=received,
                transmitted_bytes=transmitted,
            )
        )
    return samples


def aggregate(samples: list[InterfaceSample]) -> AggregatedTotals:
    total_bytes = 0
    upload_bytes = 0
    for sample in samples:
        if is_excluded_interface(sample.name):
            continue
        total_bytes += sample.received_bytes + sample.transmitted_bytes
        upload_bytes += sample.transmitted_bytes

    return AggregatedTotals(
        total_bytes=total_bytes,
        upload_bytes=upload_bytes,
        download_bytes=total_bytes - upload_bytes,
    )


class StatsReader:
    def __init__(self, path: str | Path = PROC_NET_DEV):
        self.path = Path(path)

    def read(self) -> str:
        with open(self.path, "r", encoding="utf-8") as fh:
            return fh.read()

    def sample(self) -> AggregatedTotals:
        """
        Read the table and return the totals of all non-excluded interfaces.
        Raises OSError when the table cannot be read.
        """
        return aggregate(parse_stats(self.read()))

    def interfaces(self) -> list[str]:
        return [
            sample.name
            for sample in parse_stats(self.read())
            if not is_excluded_interface(sample.name)
        ]
