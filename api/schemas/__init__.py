from .responses import AggregatedRateResponse, HealthResponse, UpstreamMetricsResponse

__all__ = [
	'AggregatedRateResponse',
	'HealthResponse',
	'UpstreamMetricsResponse',
]
