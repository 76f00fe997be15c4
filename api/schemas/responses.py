from pydantic import BaseModel, ConfigDict, Field


class AggregatedRateResponse(BaseModel):
	timestamp: int = Field(..., description='Requested instant, UNIX epoch millis')
	minrate: float = Field(..., description='Lowest USD rate seen in the window up to the timestamp')
	maxrate: float = Field(..., description='Highest USD rate seen in the window up to the timestamp')

	model_config = ConfigDict(
		json_schema_extra={'example': {'timestamp': 1286709071111, 'minrate': 6.0, 'maxrate': 8.0}}
	)


class UpstreamMetricsResponse(BaseModel):
	upstream_errors_total: int
	upstream_errors_since_last_check: int
	requests_total: int


class HealthResponse(BaseModel):
	host: str = Field(..., description='Host name serving the request')
	version: str
	database: str = Field(..., description="'OK' when the rate store answers")
	cache: str = Field(..., description="'OK', 'disabled' or the Redis error")
	rate: UpstreamMetricsResponse
