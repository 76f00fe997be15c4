import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from application.services import RateService, TallyService, UpstreamRateFetcher
from config.settings import Settings
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rates import RateRepository
from infrastructure.providers import CoinGeckoProvider, PriceSeriesProvider, UpstreamMetrics

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Application-wide singletons, built once at startup and kept on app.state."""

	def __init__(
		self,
		db: Database,
		provider: PriceSeriesProvider,
		metrics: UpstreamMetrics,
		redis_client: Redis | None = None,
	):
		self.db = db
		self.provider = provider
		self.metrics = metrics
		self.redis_client = redis_client
		self.redis_cache = RedisCacheService(redis_client) if redis_client is not None else None

	async def close(self) -> None:
		logger.info('Cleaning up dependencies...')
		if self.redis_client is not None:
			await self.redis_client.aclose()
		await self.db.close()
		await self.provider.close()
		logger.info('Cleanup complete')


def build_dependencies(settings: Settings) -> AppDependencies:
	logger.info('Initializing dependencies...')
	redis_client = None
	if settings.REDIS_URL:
		redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
	else:
		logger.info('REDIS_URL not set, rate cache tier disabled')

	deps = AppDependencies(
		db=Database(settings.DATABASE_URL),
		provider=CoinGeckoProvider(
			api_key=settings.COINGECKO_API_KEY,
			base_url=settings.COINGECKO_BASE_URL,
			timeout=settings.UPSTREAM_TIMEOUT,
			retry_attempts=settings.UPSTREAM_RETRY_ATTEMPTS,
		),
		metrics=UpstreamMetrics(),
		redis_client=redis_client,
	)
	logger.info('Dependencies initialized')
	return deps


def get_app_dependencies(request: Request) -> AppDependencies:
	return request.app.state.deps


async def get_db_session(
	deps: Annotated[AppDependencies, Depends(get_app_dependencies)],
) -> AsyncGenerator[AsyncSession, None]:
	session = deps.db.session_factory()
	try:
		yield session
		await session.commit()
	except Exception:
		await session.rollback()
		raise
	finally:
		await session.close()


def get_metrics(deps: Annotated[AppDependencies, Depends(get_app_dependencies)]) -> UpstreamMetrics:
	return deps.metrics


def get_rate_cache(
	deps: Annotated[AppDependencies, Depends(get_app_dependencies)],
) -> RedisCacheService | None:
	return deps.redis_cache


async def get_rate_repository(
	session: Annotated[AsyncSession, Depends(get_db_session)],
	cache: Annotated[RedisCacheService | None, Depends(get_rate_cache)],
) -> RateRepository:
	return RateRepository(db_session=session, cache_service=cache)


async def get_rate_fetcher(
	deps: Annotated[AppDependencies, Depends(get_app_dependencies)],
) -> UpstreamRateFetcher:
	return UpstreamRateFetcher(provider=deps.provider, metrics=deps.metrics)


async def get_rate_service(
	repository: Annotated[RateRepository, Depends(get_rate_repository)],
	fetcher: Annotated[UpstreamRateFetcher, Depends(get_rate_fetcher)],
) -> RateService:
	return RateService(repository=repository, fetcher=fetcher)


async def get_tally_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> TallyService:
	return TallyService(rate_service=rate_service)
