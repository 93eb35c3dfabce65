import logging
from collections import OrderedDict
from typing import Callable

from netspeed import glyphs
from netspeed.data import network_speed as ns
from netspeed.util.config import ConfigStore
from netspeed.util.conversion import speed_to_string
from netspeed.util.formatter import SpeedFormatter
from netspeed.util.network import StatsReader
from netspeed.util.rate import RateCalculator
from netspeed.util import wtime

logger = logging.getLogger(__name__)

LEFT_BUTTON = 1
MIDDLE_BUTTON = 2
RIGHT_BUTTON = 3

WIDE_MODES = (ns.DisplayMode.SPLIT_BPS, ns.DisplayMode.SPLIT_BYTES)


class Monitor:
    """
    Owns the sampling pipeline of one display: reader, rate calculator,
    formatter and the persisted settings. Calls must come from a single thread.
    """

    def __init__(
        self,
        store: ConfigStore,
        reader: StatsReader | None = None,
        calculator: RateCalculator | None = None,
        formatter: SpeedFormatter | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.store = store
        self.reader = reader or StatsReader()
        self.calculator = calculator or RateCalculator()
        self.formatter = formatter or SpeedFormatter()
        self.clock = clock or wtime.unix_time_in_ms

    def tick(self, mode: ns.DisplayMode | None = None) -> ns.Reading:
        mode = ns.DisplayMode(mode if mode is not None else self.store.mode)
        try:
            totals = self.reader.sample()
        except OSError as e:
            logger.error(f"failed to read network statistics: {e}")
            return ns.Reading(
                success=False,
                error=f"failed to read network statistics: {e}",
                text=f"{glyphs.md_alert} Error",
                mode=mode,
                updated=wtime.get_human_timestamp(),
            )

        stats = self.calculator.update(totals, self.clock())
        total_since_reset = self.calculator.total_since_reset(totals)
        text = self.formatter.format(
            stats,
            mode,
            total_since_reset if mode == ns.DisplayMode.TOTAL_DOWNLOADED else None,
        )
        logger.debug(f"{mode.name}: {text}")

        return ns.Reading(
            success=True,
            text=text,
            mode=mode,
            stats=stats,
            total_since_reset=total_since_reset,
            updated=wtime.get_human_timestamp(),
        )

    def cycle_mode(self) -> ns.DisplayMode:
        mode = self.store.cycle_mode()
        logger.info(f"mode changed to {mode} ({mode.description})")
        return mode

    def cycle_font_mode(self) -> int:
        font_mode = self.store.cycle_font_mode()
        logger.info(f"font mode changed to {font_mode}")
        return font_mode

    def reset_total(self):
        """
        Start counting the cumulative total from the current counters.
        Raises OSError when the counters cannot be read.
        """
        self.calculator.reset_baseline(self.reader.sample())
        logger.info("total download counter reset")

    def click(self, button: int) -> bool:
        """
        Apply a panel click: left cycles the mode, middle cycles the font mode
        and right resets the cumulative total while it is displayed.
        """
        logger.debug(f"click with button {button} in mode {self.store.mode}")
        if button == LEFT_BUTTON:
            self.cycle_mode()
        elif button == MIDDLE_BUTTON:
            self.cycle_font_mode()
        elif button == RIGHT_BUTTON and self.store.mode == ns.DisplayMode.TOTAL_DOWNLOADED:
            try:
                self.reset_total()
            except OSError as e:
                logger.error(f"failed to reset total: {e}")
                return False
        else:
            return False
        return True

    def style_class(self) -> str:
        style = "netspeed-label-wide" if self.store.mode in WIDE_MODES else "netspeed-label"
        if self.store.font_mode > 0:
            style = f"{style}-{self.store.font_mode}"
        return style

    def tooltip(self, reading: ns.Reading) -> str:
        if not reading.success:
            return reading.error or "Error"

        tooltip: list[str] = [reading.mode.description]
        tooltip_od: OrderedDict[str, str] = OrderedDict()

        tooltip_od["Download"] = speed_to_string(
            reading.stats.download_speed, ns.DisplayMode.SPLIT_BYTES
        )
        tooltip_od["Upload"] = speed_to_string(
            reading.stats.upload_speed, ns.DisplayMode.SPLIT_BYTES
        )
        tooltip_od["Total"] = speed_to_string(
            reading.total_since_reset, ns.DisplayMode.TOTAL_DOWNLOADED
        )

        try:
            interfaces = self.reader.interfaces()
        except OSError:
            interfaces = []
        if interfaces:
            tooltip_od["Interfaces"] = ", ".join(interfaces)

        max_key_length = max(len(key) for key in tooltip_od.keys())
        for key, value in tooltip_od.items():
            tooltip.append(f"{key:{max_key_length}} : {value}")

        tooltip.append("")
        tooltip.append(f"Last updated {reading.updated}")

        return "\n".join(tooltip)
