from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Rate providers
	RATES_PROVIDER: Literal['exchangerate-api', 'frankfurter'] = 'exchangerate-api'
	EXCHANGERATE_API_URL: str = 'https://api.exchangerate-api.com/v4/latest'
	FRANKFURTER_API_URL: str = 'https://api.frankfurter.app'
	FETCH_TIMEOUT_SECONDS: float = 10.0

	# Cache
	CACHE_BACKEND: Literal['memory', 'redis'] = 'memory'
	REDIS_URL: str = 'redis://localhost:6379'
	CACHE_TTL_HOURS: int = 24
	CACHE_TIMEOUT_SECONDS: float = 2.0

	# Application
	APP_NAME: str = 'FX Rate Resolver'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
