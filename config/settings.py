from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./exrate.db'

	# Empty disables the Redis tier in front of the rate table
	REDIS_URL: str = 'redis://localhost:6379'

	COINGECKO_BASE_URL: str = 'https://api.coingecko.com/api/v3'
	COINGECKO_API_KEY: str = ''
	UPSTREAM_TIMEOUT: int = 10
	UPSTREAM_RETRY_ATTEMPTS: int = 3

	# Upstream errors tolerated between two health checks
	HEALTH_MAX_UPSTREAM_ERRORS: int = 0

	# Application
	APP_NAME: str = 'Exchange Rate Band API'
	VERSION: str = '1.0.0'
	LOG_LEVEL: str = 'INFO'
	HOST: str = '0.0.0.0'
	PORT: int = 8110
	DEBUG: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
