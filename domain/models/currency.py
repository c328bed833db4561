import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from types import MappingProxyType


@dataclass(frozen=True)
class Currency:
	code: str
	name: str
	symbol: str


@dataclass(frozen=True)
class RateTable:
	"""Rates quoted as units of each currency per one unit of ``base``.

	The base currency is always implicitly rated at 1. Tables are built
	whole from a single fetch and never patched afterwards.
	"""

	base: str
	rates: Mapping[str, float] = field(default_factory=dict)

	def __post_init__(self) -> None:
		cleaned: dict[str, float] = {}
		for code, rate in self.rates.items():
			if isinstance(rate, bool) or not isinstance(rate, int | float):
				raise ValueError(f'Rate for {code} is not a number: {rate!r}')
			if not math.isfinite(rate) or rate <= 0:
				raise ValueError(f'Rate for {code} must be positive and finite, got {rate}')
			cleaned[code] = float(rate)
		object.__setattr__(self, 'rates', MappingProxyType(cleaned))

	def has_rate(self, code: str) -> bool:
		return code == self.base or code in self.rates

	def rate_for(self, code: str) -> float | None:
		if code == self.base:
			return 1.0
		return self.rates.get(code)


@dataclass(frozen=True)
class RateSnapshot:
	table: RateTable
	timestamp: datetime

	def age(self, now: datetime | None = None) -> timedelta:
		return (now or datetime.now(UTC)) - self.timestamp


@dataclass(frozen=True)
class ConversionRecord:
	id: int
	source: str
	target: str
	amount: float
	result: float
	timestamp: datetime
