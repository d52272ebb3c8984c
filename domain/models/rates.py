import math
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from domain.exceptions.rates import InvalidRateError


class Currency(str, Enum):
	USD = 'USD'
	ARS = 'ARS'
	EUR = 'EUR'


def utc_now() -> datetime:
	return datetime.now(UTC)


def _check_rate(name: str, value: float) -> None:
	if isinstance(value, bool) or not isinstance(value, int | float):
		raise InvalidRateError(f'{name} must be a number, got {value!r}')
	if not math.isfinite(value) or value <= 0:
		raise InvalidRateError(f'{name} must be a positive finite number, got {value!r}')


@dataclass(frozen=True)
class RateSnapshot:
	"""One consistent set of rates, expressed as USD value of one foreign unit."""

	ars_to_usd: float
	eur_to_usd: float
	captured_at: datetime
	source: str = 'unknown'

	def __post_init__(self):
		_check_rate('ars_to_usd', self.ars_to_usd)
		_check_rate('eur_to_usd', self.eur_to_usd)

	@property
	def usd_to_ars(self) -> float:
		return 1 / self.ars_to_usd

	@property
	def usd_to_eur(self) -> float:
		return 1 / self.eur_to_usd

	def age_seconds(self, now: datetime) -> float:
		return (now - self.captured_at).total_seconds()


@dataclass(frozen=True)
class PartialRate:
	ars_to_usd: float | None = None
	eur_to_usd: float | None = None

	@property
	def is_complete(self) -> bool:
		return self.ars_to_usd is not None and self.eur_to_usd is not None


@dataclass(frozen=True)
class SourceOutcome:
	"""Result of a single provider call. Build with ``ok`` or ``failure``."""

	source: str
	success: bool
	value: PartialRate | None = None
	failure_reason: str | None = None

	@classmethod
	def ok(cls, source: str, value: PartialRate) -> 'SourceOutcome':
		return cls(source=source, success=True, value=value)

	@classmethod
	def failure(cls, source: str, reason: str) -> 'SourceOutcome':
		return cls(source=source, success=False, failure_reason=reason)


@dataclass(frozen=True)
class RateQueryResult:
	ok: bool
	snapshot: RateSnapshot
	error_message: str | None = None
	from_cache: bool = False
