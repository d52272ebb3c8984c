class RateException(Exception):
	pass


class ProviderError(RateException):
	pass


class InvalidRateError(RateException):
	pass


class CacheError(RateException):
	pass
