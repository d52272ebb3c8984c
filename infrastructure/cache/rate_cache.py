import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from domain.models.rates import RateSnapshot, utc_now

logger = logging.getLogger(__name__)


class RateCache:
	"""Holds the last good snapshot for one service instance.

	Only successful snapshots are stored, and an older snapshot never replaces
	a newer one.
	"""

	def __init__(
		self,
		freshness: timedelta = timedelta(seconds=60),
		clock: Callable[[], datetime] = utc_now,
	):
		self.freshness = freshness
		self.clock = clock
		self._snapshot: RateSnapshot | None = None

	@property
	def snapshot(self) -> RateSnapshot | None:
		return self._snapshot

	def is_fresh(self, snapshot: RateSnapshot | None) -> bool:
		if snapshot is None:
			return False
		age = self.clock() - snapshot.captured_at
		return timedelta(0) <= age < self.freshness

	def get_fresh(self) -> RateSnapshot | None:
		snapshot = self._snapshot
		return snapshot if self.is_fresh(snapshot) else None

	def store(self, snapshot: RateSnapshot) -> bool:
		current = self._snapshot
		if current is not None and snapshot.captured_at < current.captured_at:
			logger.warning(
				f'Ignoring snapshot captured at {snapshot.captured_at.isoformat()}, '
				f'cache already holds {current.captured_at.isoformat()}'
			)
			return False

		self._snapshot = snapshot
		return True

	def age_seconds(self) -> float | None:
		if self._snapshot is None:
			return None
		return self._snapshot.age_seconds(self.clock())
