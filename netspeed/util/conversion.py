from netspeed.data.network_speed import DisplayMode

BIT_RATE_UNITS = ["bps", "Kbps", "Mbps", "Gbps"]
BYTE_RATE_UNITS = ["B/s", "K/s", "M/s", "G/s"]
BYTE_UNITS = ["B", "KB", "MB", "GB"]

BIT_RATE_MODES = (DisplayMode.TOTAL_BPS, DisplayMode.SPLIT_BPS)


def units_for_mode(mode: DisplayMode) -> list[str]:
    if mode in BIT_RATE_MODES:
        return BIT_RATE_UNITS
    elif mode == DisplayMode.TOTAL_DOWNLOADED:
        return BYTE_UNITS
    return BYTE_RATE_UNITS


def significant_digits(number: float) -> int:
    """
    Pick the number of decimals that keeps three significant digits,
    e.g., 123K, 12.3K, 1.23K.
    """
    if number >= 100:
        return 0
    elif number >= 10:
        return 1
    return 2


def speed_to_string(amount: float, mode: DisplayMode) -> str:
    """
    Scale a byte count or byte rate to the largest fitting unit of the mode,
    using decimal (1000-based) prefixes.
    """
    units = units_for_mode(mode)

    if amount == 0:
        return f"0{units[0]}"

    if mode in BIT_RATE_MODES:
        amount = amount * 8

    unit = 0
    while amount >= 1000 and unit < len(units) - 1:
        amount /= 1000
        unit += 1

    return f"{amount:.{significant_digits(amount)}f}{units[unit]}"
