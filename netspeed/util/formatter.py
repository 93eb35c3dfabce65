from netspeed import glyphs
from netspeed.data.network_speed import DisplayMode, SpeedStats
from netspeed.util.conversion import speed_to_string

TOTAL_MODES = (DisplayMode.TOTAL_BPS, DisplayMode.TOTAL_BYTES)
SPLIT_MODES = (DisplayMode.SPLIT_BPS, DisplayMode.SPLIT_BYTES)


class SpeedFormatter:
    """
    Render speed statistics for a display mode.

    The activity glyph is shown when the total speed went up since the previous
    call, so the formatter remembers the last total speed it saw.
    """

    def __init__(self):
        self.last_speed: float = 0.0

    def format(
        self,
        stats: SpeedStats,
        mode: DisplayMode,
        total_since_reset: int | None = None,
    ) -> str:
        activity = glyphs.activity if stats.total_speed > self.last_speed else ""
        self.last_speed = stats.total_speed

        if mode in TOTAL_MODES:
            return f"{activity}{speed_to_string(stats.total_speed, mode)}"
        elif mode in SPLIT_MODES:
            return (
                f"{glyphs.arrow_down}{speed_to_string(stats.download_speed, mode)}"
                f" {glyphs.arrow_up}{speed_to_string(stats.upload_speed, mode)}"
            )
        elif mode == DisplayMode.TOTAL_DOWNLOADED:
            total = total_since_reset if total_since_reset is not None else 0
            return f"{glyphs.sigma} {speed_to_string(total, mode)}"

        return speed_to_string(stats.total_speed, DisplayMode.TOTAL_BYTES)

    @staticmethod
    def describe(mode: DisplayMode) -> str:
        return DisplayMode(mode).description

    @staticmethod
    def all_modes() -> list[DisplayMode]:
        return list(DisplayMode)
