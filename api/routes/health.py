import logging
import socket
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_metrics, get_rate_cache, get_rate_repository
from api.schemas import HealthResponse, UpstreamMetricsResponse
from config.settings import Settings, get_settings
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.repositories.rates import RateRepository
from infrastructure.providers import UpstreamMetrics

logger = logging.getLogger(__name__)

router = APIRouter(tags=['health'])


@router.get(
	'/status.json',
	response_model=HealthResponse,
	status_code=status.HTTP_200_OK,
	summary='Service health',
)
async def health_check(
	repository: Annotated[RateRepository, Depends(get_rate_repository)],
	cache: Annotated[RedisCacheService | None, Depends(get_rate_cache)],
	metrics: Annotated[UpstreamMetrics, Depends(get_metrics)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
	"""Fails with 503 when the rate store is unreachable or upstream errors since
	the previous check exceed HEALTH_MAX_UPSTREAM_ERRORS. Redis is reported but
	never fails the check."""
	db_error = await repository.health_check()
	if db_error:
		logger.error(f'DB ERROR :: {db_error}')
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail={'status': 'unhealthy', 'database': db_error},
		)

	# taken after the DB probe so a failed probe keeps the error baseline
	snapshot = metrics.snapshot()
	rate_metrics = UpstreamMetricsResponse(
		upstream_errors_total=snapshot.upstream_errors_total,
		upstream_errors_since_last_check=snapshot.upstream_errors_since_last_check,
		requests_total=snapshot.requests_total,
	)
	if snapshot.upstream_errors_since_last_check > settings.HEALTH_MAX_UPSTREAM_ERRORS:
		logger.error(f'RATE ERROR :: {rate_metrics.model_dump()}')
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail={'status': 'unhealthy', 'rate': rate_metrics.model_dump()},
		)

	cache_status = 'disabled'
	if cache is not None:
		cache_error = await cache.health_check()
		if cache_error:
			logger.warning(f'CACHE ERROR :: {cache_error}')
		cache_status = cache_error or 'OK'

	return HealthResponse(
		host=socket.gethostname(),
		version=settings.VERSION,
		database='OK',
		cache=cache_status,
		rate=rate_metrics,
	)
