from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RatePoint:
    currency: str
    bucket: int  # epoch millis, floored to the sampling period
    rate: float


@dataclass(frozen=True)
class AggregatedRate:
    timestamp: int  # epoch millis of the requested instant, not normalized
    minrate: float
    maxrate: float


@dataclass(frozen=True)
class TallyEntry:
    amount: Decimal  # in the requested denomination
    timestamp: int


@dataclass(frozen=True)
class UpstreamMetricsSnapshot:
    upstream_errors_total: int
    upstream_errors_since_last_check: int
    requests_total: int
