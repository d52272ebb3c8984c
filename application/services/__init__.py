from .exchange_rate_service import ExchangeRateService
from .rate_aggregator import RateAggregator

__all__ = ['ExchangeRateService', 'RateAggregator']
