"""Bucket and trailing-window arithmetic.

All instants are epoch milliseconds. A bucket is an instant floored to the
sampling period; a window is the bucket plus the buckets reaching
``WINDOW_SPAN_MS`` into the past.
"""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

PERIOD_MS = 60 * 60 * 1000
WINDOW_SPAN_MS = 3 * PERIOD_MS


def normalize(instant_ms: int) -> int:
    return (instant_ms // PERIOD_MS) * PERIOD_MS


def expand_window(bucket: int) -> list[int]:
    """Return the buckets sampled for min/max, newest first."""
    earliest = bucket - WINDOW_SPAN_MS
    result: dict[int, None] = {}
    current = bucket
    while current >= earliest:
        result[current] = None
        current -= PERIOD_MS
    return list(result)


def window_start(instant_ms: int) -> int:
    return normalize(instant_ms) - WINDOW_SPAN_MS


def to_epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def from_epoch_millis(instant_ms: int) -> datetime:
    return EPOCH + timedelta(milliseconds=instant_ms)
