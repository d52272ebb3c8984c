import math
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Exchange Rate Service'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	JSON_LOGS: bool = False

	# Upstream quote providers
	PROVIDER_TIMEOUT_SECONDS: float = 5.0

	# Cache and refresh
	RATE_FRESHNESS_SECONDS: float = 60.0
	REFRESH_INTERVAL_SECONDS: float = 60.0
	REDIS_URL: str = ''

	# Used only when every source fails
	DEFAULT_ARS_TO_USD: float = 0.001
	DEFAULT_EUR_TO_USD: float = 1.1

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@model_validator(mode='after')
	def check_rates_and_intervals(self) -> 'Settings':
		if self.PROVIDER_TIMEOUT_SECONDS <= 0:
			raise ValueError('PROVIDER_TIMEOUT_SECONDS must be positive')
		if self.RATE_FRESHNESS_SECONDS <= 0:
			raise ValueError('RATE_FRESHNESS_SECONDS must be positive')
		if 0 < self.REFRESH_INTERVAL_SECONDS < self.RATE_FRESHNESS_SECONDS:
			raise ValueError(
				'REFRESH_INTERVAL_SECONDS must be 0 (disabled) or at least RATE_FRESHNESS_SECONDS'
			)
		if self.REFRESH_INTERVAL_SECONDS < 0:
			raise ValueError('REFRESH_INTERVAL_SECONDS cannot be negative')
		for rate in (self.DEFAULT_ARS_TO_USD, self.DEFAULT_EUR_TO_USD):
			if not math.isfinite(rate) or rate <= 0:
				raise ValueError('Default rates must be positive and finite')
		return self


@lru_cache
def get_settings() -> Settings:
	return Settings()
