from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Rate feed
	BASE_CURRENCY: str = 'ARS'
	RATE_FEED_URL: str = 'https://open.er-api.com/v6'
	FEED_TIMEOUT: int = 10
	FEED_RETRY_ATTEMPTS: int = 1
	FEED_RETRY_BACKOFF: float = 1.0
	RATE_MAX_AGE_SECONDS: int | None = None

	# Persistence
	STORAGE_BACKEND: Literal['sql', 'redis'] = 'sql'
	DATABASE_URL: str = 'sqlite+aiosqlite:///./currency_converter.db'
	REDIS_URL: str = 'redis://localhost:6379'

	HISTORY_CAPACITY: int = 20

	# Application
	APP_NAME: str = 'Currency Converter'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str | None = None

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
