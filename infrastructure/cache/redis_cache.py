import json
from datetime import datetime, timedelta

from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.rates import CacheError, InvalidRateError
from domain.models.rates import RateSnapshot


class RedisSnapshotStore:
	"""Shares the last good snapshot between processes through Redis."""

	KEY = 'rates:snapshot'

	def __init__(self, redis_client: redis.Redis, ttl: timedelta = timedelta(seconds=60)):
		self.redis = redis_client
		self.ttl = ttl

	async def get_snapshot(self) -> RateSnapshot | None:
		try:
			data = await self.redis.get(self.KEY)
		except RedisError as e:
			raise CacheError(f'Redis read failed: {e}') from e

		if not data:
			return None

		try:
			snapshot_dict = json.loads(data)
			captured_at = datetime.fromisoformat(snapshot_dict['captured_at'])
			if captured_at.tzinfo is None:
				raise CacheError(f'Snapshot under {self.KEY} has no timezone')
			return RateSnapshot(
				ars_to_usd=float(snapshot_dict['ars_to_usd']),
				eur_to_usd=float(snapshot_dict['eur_to_usd']),
				captured_at=captured_at,
				source=snapshot_dict.get('source', 'unknown'),
			)
		except json.JSONDecodeError as e:
			raise CacheError(f'Invalid json data under {self.KEY}') from e
		except (KeyError, TypeError, ValueError, InvalidRateError) as e:
			raise CacheError(f'Invalid snapshot under {self.KEY}: {e}') from e

	async def set_snapshot(self, snapshot: RateSnapshot) -> None:
		snapshot_dict = {
			'ars_to_usd': snapshot.ars_to_usd,
			'eur_to_usd': snapshot.eur_to_usd,
			'captured_at': snapshot.captured_at.isoformat(),
			'source': snapshot.source,
		}

		try:
			await self.redis.setex(self.KEY, self.ttl, json.dumps(snapshot_dict))
		except RedisError as e:
			raise CacheError(f'Redis write failed: {e}') from e

	async def ping(self) -> bool:
		try:
			return bool(await self.redis.ping())
		except RedisError:
			return False
