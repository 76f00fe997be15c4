import logging

from application.services.rate_fetcher import UpstreamRateFetcher
from domain.exceptions.rates import InsufficientHistoryError, StoreWriteError, UpstreamFetchError
from domain.models.denomination import Denomination, convert
from domain.models.rates import AggregatedRate, RatePoint
from domain.window import PERIOD_MS, expand_window, from_epoch_millis, normalize, window_start
from infrastructure.persistence.repositories.rates import RateRepository

logger = logging.getLogger(__name__)


class RateService:
    """Min/max USD rate bands over each instant's trailing window."""

    def __init__(self, repository: RateRepository, fetcher: UpstreamRateFetcher):
        self.repository = repository
        self.fetcher = fetcher

    async def get_rates(self, currency: str, timestamps: list[int]) -> list[AggregatedRate]:
        """Return one band per requested instant, in the order given.

        Rates are taken from the store first; buckets it lacks are fetched
        upstream in a single call and written back.
        """
        denomination = Denomination.from_code(currency)
        if not timestamps:
            return []

        rates_by_bucket = await self._collect_rates(denomination.base, timestamps)
        results = [self._reduce(t, rates_by_bucket) for t in timestamps]

        if denomination.code == denomination.base:
            return results
        return [
            AggregatedRate(
                timestamp=r.timestamp,
                minrate=convert(r.minrate, denomination.code),
                maxrate=convert(r.maxrate, denomination.code),
            )
            for r in results
        ]

    async def _collect_rates(self, base: str, timestamps: list[int]) -> dict[int, float]:
        query_buckets = {normalize(t) for t in timestamps}
        needed = sorted({b for q in query_buckets for b in expand_window(q)})

        stored = await self.repository.get(base, needed)
        rates_by_bucket = {p.bucket: p.rate for p in stored}

        missing = [b for b in needed if b not in rates_by_bucket]
        if missing:
            logger.info(f"{len(missing)} of {len(needed)} {base} buckets not cached")
            for point in await self._backfill(base, missing[0], missing[-1]):
                rates_by_bucket.setdefault(point.bucket, point.rate)

        return rates_by_bucket

    async def _backfill(self, base: str, from_bucket: int, to_bucket: int) -> list[RatePoint]:
        try:
            fetched = await self.fetcher.fetch(base, from_bucket, to_bucket)
        except UpstreamFetchError as e:
            logger.error(f"Upstream fetch failed for {base}: {e}")
            return []

        expected = (to_bucket - from_bucket) // PERIOD_MS + 1
        if len(fetched) < expected:
            logger.info(f"Upstream has no {base} prices before {len(fetched)} of {expected} buckets")

        try:
            await self.repository.put(base, fetched)
        except StoreWriteError as e:
            logger.warning(f"Could not cache fetched {base} rates: {e}")

        return fetched

    def _reduce(self, timestamp: int, rates_by_bucket: dict[int, float]) -> AggregatedRate:
        start = window_start(timestamp)
        if start not in rates_by_bucket:
            raise InsufficientHistoryError(
                f"rates do not cover expanded time window "
                f"(time window start: {from_epoch_millis(start).isoformat()})"
            )

        # buckets opened before the instant itself, oldest window bucket included
        window_rates = [
            rates_by_bucket[b]
            for b in expand_window(normalize(timestamp))
            if start <= b < timestamp and b in rates_by_bucket
        ]
        return AggregatedRate(
            timestamp=timestamp, minrate=min(window_rates), maxrate=max(window_rates)
        )
