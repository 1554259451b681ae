"""
Poll scheduling for long-running generation jobs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PollPolicy:
    """Interval, backoff and bounds of the poll loop.

    The interval grows by `backoff_factor` for every consecutive transient
    failure and drops back to `interval` after a successful poll.
    """
    interval: float = 5.0
    backoff_factor: float = 2.0
    max_interval: float = 30.0
    timeout: float = 15 * 60.0
    max_transient_errors: int = 12

    def __post_init__(self):
        if self.interval < 0:
            raise ValueError("interval must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.max_interval < self.interval:
            raise ValueError("max_interval must be >= interval")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.max_transient_errors < 0:
            raise ValueError("max_transient_errors must be >= 0")

    def delay_for(self, consecutive_failures: int) -> float:
        """Seconds to wait before the next poll."""
        if consecutive_failures <= 0:
            return self.interval
        delay = self.interval * (self.backoff_factor ** consecutive_failures)
        return min(delay, self.max_interval)

    def retries_exhausted(self, consecutive_failures: int) -> bool:
        return consecutive_failures > self.max_transient_errors

    @classmethod
    def from_config(cls) -> "PollPolicy":
        from adgen import config
        return cls(
            interval=config.POLL_INTERVAL_SECONDS,
            backoff_factor=config.POLL_BACKOFF_FACTOR,
            max_interval=max(config.POLL_MAX_INTERVAL_SECONDS, config.POLL_INTERVAL_SECONDS),
            timeout=config.POLL_TIMEOUT_SECONDS,
            max_transient_errors=config.POLL_MAX_TRANSIENT_ERRORS,
        )
