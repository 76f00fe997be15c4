import logging

from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.rates import CacheError, StoreReadError, StoreWriteError
from domain.models.rates import RatePoint
from domain.window import from_epoch_millis, to_epoch_millis
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.models.rates import ExchangeRateDB

logger = logging.getLogger(__name__)

# asyncpg caps a statement at 32767 bind parameters
BATCH_SIZE = 1000


class RateRepository:
	"""(currency, bucket) -> rate cache backed by the exchange_rates table.

	Rows are write-once: inserts that hit the (currency, bucket) unique
	constraint are dropped so the first stored rate is kept.
	"""

	def __init__(self, db_session: AsyncSession, cache_service: RedisCacheService | None = None):
		self.db_session = db_session
		self.cache = cache_service

	def _insert(self):
		if self.db_session.bind.dialect.name == 'postgresql':
			return postgresql.insert(ExchangeRateDB)
		return sqlite.insert(ExchangeRateDB)

	async def put(self, currency: str, points: list[RatePoint]) -> None:
		if not points:
			return

		rows = [
			{'currency': currency, 'bucket': from_epoch_millis(p.bucket), 'rate': p.rate}
			for p in points
		]
		try:
			for start in range(0, len(rows), BATCH_SIZE):
				stmt = self._insert().values(rows[start:start + BATCH_SIZE]).on_conflict_do_nothing(
					index_elements=['currency', 'bucket']
				)
				await self.db_session.execute(stmt)
			await self.db_session.commit()
		except SQLAlchemyError as e:
			await self.db_session.rollback()
			raise StoreWriteError(f'insertion error :: {e}') from e

		if self.cache is not None:
			try:
				await self.cache.set_rates(
					[RatePoint(currency=currency, bucket=p.bucket, rate=p.rate) for p in points]
				)
			except CacheError as e:
				logger.warning(f'Could not populate rate cache for {currency}: {e}')

	async def get(self, currency: str, buckets: list[int]) -> list[RatePoint]:
		if not buckets:
			return []

		found = await self._get_cached(currency, buckets)
		remaining = [b for b in buckets if b not in found]
		points = [RatePoint(currency=currency, bucket=b, rate=r) for b, r in found.items()]
		if not remaining:
			return points

		rows = []
		try:
			for start in range(0, len(remaining), BATCH_SIZE):
				stmt = select(ExchangeRateDB).filter(
					ExchangeRateDB.currency == currency,
					ExchangeRateDB.bucket.in_(
						[from_epoch_millis(b) for b in remaining[start:start + BATCH_SIZE]]
					),
				)
				result = await self.db_session.execute(stmt)
				rows.extend(result.scalars().all())
		except SQLAlchemyError as e:
			raise StoreReadError(f'read error :: {e}') from e

		db_points = [
			RatePoint(currency=row.currency, bucket=to_epoch_millis(row.bucket), rate=row.rate)
			for row in rows
		]
		if db_points and self.cache is not None:
			try:
				await self.cache.set_rates(db_points)
			except CacheError as e:
				logger.warning(f'Could not populate rate cache for {currency}: {e}')

		return points + db_points

	async def _get_cached(self, currency: str, buckets: list[int]) -> dict[int, float]:
		if self.cache is None:
			return {}
		try:
			return await self.cache.get_rates(currency, buckets)
		except CacheError as e:
			logger.warning(f'Rate cache unavailable, reading {currency} from database: {e}')
			return {}

	async def health_check(self) -> str | None:
		try:
			await self.db_session.execute(text('SELECT 1'))
			return None
		except SQLAlchemyError as e:
			await self.db_session.rollback()
			logger.warning(f'Rate store not healthy: {e}')
			return str(e)
