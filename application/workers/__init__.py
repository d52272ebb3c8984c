from .rate_refresher import RateRefresher

__all__ = ['RateRefresher']
