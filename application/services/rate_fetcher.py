import logging

from domain.exceptions.rates import UpstreamFetchError
from domain.models.rates import RatePoint
from domain.window import PERIOD_MS, WINDOW_SPAN_MS, from_epoch_millis
from infrastructure.providers.base import PriceSeriesProvider
from infrastructure.providers.metrics import UpstreamMetrics

logger = logging.getLogger(__name__)


class UpstreamRateFetcher:
    def __init__(self, provider: PriceSeriesProvider, metrics: UpstreamMetrics):
        self.provider = provider
        self.metrics = metrics

    async def fetch(self, currency: str, from_bucket: int, to_bucket: int) -> list[RatePoint]:
        """Fetch rates for every bucket in [from_bucket, to_bucket], newest first.

        The result is shorter than requested when the provider has no price
        at or before the older buckets.
        """
        logger.info(
            f"Fetching {currency} rates from {from_epoch_millis(from_bucket).isoformat()} "
            f"to {from_epoch_millis(to_bucket).isoformat()} via {self.provider.name}"
        )
        self.metrics.record_request()
        try:
            series = await self.provider.fetch_price_series(
                currency, from_bucket - WINDOW_SPAN_MS, to_bucket
            )
        except UpstreamFetchError:
            self.metrics.record_error()
            raise

        return resample(currency, series, from_bucket, to_bucket)


def resample(
    currency: str, series: list[tuple[int, float]], from_bucket: int, to_bucket: int
) -> list[RatePoint]:
    """Give each bucket the most recent price timestamped at or before it.

    Buckets are walked from ``to_bucket`` down with one cursor over the series
    sorted newest first; the walk ends when the series runs out.
    """
    prices = sorted(series, key=lambda sample: sample[0], reverse=True)
    points: list[RatePoint] = []
    cursor = 0
    bucket = to_bucket
    while bucket >= from_bucket:
        while cursor < len(prices) and prices[cursor][0] > bucket:
            cursor += 1
        if cursor == len(prices):
            break
        points.append(RatePoint(currency=currency, bucket=bucket, rate=prices[cursor][1]))
        bucket -= PERIOD_MS
    return points
