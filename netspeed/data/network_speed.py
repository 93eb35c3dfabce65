from dataclasses import dataclass, field
from enum import IntEnum


class DisplayMode(IntEnum):
    TOTAL_BPS = 0
    TOTAL_BYTES = 1
    SPLIT_BPS = 2
    SPLIT_BYTES = 3
    TOTAL_DOWNLOADED = 4

    @property
    def description(self) -> str:
        return MODE_DESCRIPTIONS[self]


MODE_DESCRIPTIONS: dict[DisplayMode, str] = {
    DisplayMode.TOTAL_BPS: "Total net speed in bits per second",
    DisplayMode.TOTAL_BYTES: "Total net speed in Bytes per second",
    DisplayMode.SPLIT_BPS: "Up & down speed in bits per second",
    DisplayMode.SPLIT_BYTES: "Up & down speed in Bytes per second",
    DisplayMode.TOTAL_DOWNLOADED: "Total downloaded in Bytes",
}


@dataclass(frozen=True)
class InterfaceSample:
    name: str = ""
    received_bytes: int = 0
    transmitted_bytes: int = 0


@dataclass(frozen=True)
class AggregatedTotals:
    total_bytes: int = 0
    upload_bytes: int = 0
    download_bytes: int = 0


@dataclass
class RateSample:
    totals: AggregatedTotals = field(default_factory=AggregatedTotals)
    timestamp_millis: int = 0


@dataclass
class SpeedStats:
    total_speed: float = 0.0
    upload_speed: float = 0.0
    download_speed: float = 0.0
    timestamp_millis: int = 0


@dataclass
class Config:
    mode: DisplayMode = DisplayMode.TOTAL_BPS
    font_mode: int = 0
    refresh_interval: int = 3


@dataclass
class Reading:
    success: bool = False
    error: str | None = None
    text: str = ""
    mode: DisplayMode = DisplayMode.TOTAL_BPS
    stats: SpeedStats = field(default_factory=SpeedStats)
    total_since_reset: int = 0
    updated: str | None = None
