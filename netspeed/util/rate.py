from netspeed.data.network_speed import AggregatedTotals, RateSample, SpeedStats

# Smallest elapsed time used as a divisor, in seconds
MIN_ELAPSED_SECONDS = 0.001


class RateCalculator:
    """
    Turn successive counter samples into per-second rates.

    The first update only records a baseline and reports zero speeds. Counters
    that went backwards (interface reset, wraparound) produce a rate of zero for
    that interval.
    """

    def __init__(self):
        self.previous: RateSample | None = None
        self.baseline: int = 0

    def update(self, current: AggregatedTotals, now_millis: int) -> SpeedStats:
        if self.previous is None:
            self.previous = RateSample(totals=current, timestamp_millis=now_millis)
            return SpeedStats(timestamp_millis=now_millis)

        previous = self.previous.totals
        elapsed = max(
            MIN_ELAPSED_SECONDS, (now_millis - self.previous.timestamp_millis) / 1000
        )

        total_speed = (current.total_bytes - previous.total_bytes) / elapsed
        upload_speed = (current.upload_bytes - previous.upload_bytes) / elapsed
        download_speed = total_speed - upload_speed

        self.previous = RateSample(totals=current, timestamp_millis=now_millis)

        return SpeedStats(
            total_speed=max(0.0, total_speed),
            upload_speed=max(0.0, upload_speed),
            download_speed=max(0.0, download_speed),
            timestamp_millis=now_millis,
        )

    def total_since_reset(self, current: AggregatedTotals) -> int:
        return max(0, current.total_bytes - self.baseline)

    def reset_baseline(self, current: AggregatedTotals):
        self.baseline = current.total_bytes
