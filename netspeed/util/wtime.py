import time
from datetime import datetime


def get_human_timestamp() -> str:
    now = int(time.time())
    dt = datetime.fromtimestamp(now)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def get_clock_timestamp() -> str:
    """
    Return the local wall-clock time, e.g., 14:03:27.
    """
    return datetime.now().strftime("%H:%M:%S")


def unix_time_in_ms() -> int:
    """
    Return the Unix timestamp in milliseconds.
    """
    return int(time.time() * 1000)
