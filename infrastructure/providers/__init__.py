from .base import QuoteProvider
from .bluelytics import BluelyticsProvider
from .dollar_blue import DollarBlueProvider
from .exchangerate_api import ExchangeRateAPIProvider
from .exchangerate_host import ExchangeRateHostProvider
from .fxapi import FXAPIProvider

__all__ = [
	'QuoteProvider',
	'BluelyticsProvider',
	'DollarBlueProvider',
	'ExchangeRateAPIProvider',
	'ExchangeRateHostProvider',
	'FXAPIProvider',
]
