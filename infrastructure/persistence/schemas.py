"""Versioned on-disk formats for the two persisted records.

Version 1 is the current format. Payloads without a ``schema_version`` field
are the legacy unversioned format (a bare ``{rates, timestamp}`` object for
rates, a bare list for history) and are migrated on read.
"""

import json
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from domain.models.currency import ConversionRecord, RateSnapshot, RateTable

RATES_KEY = 'converter-rates'
HISTORY_KEY = 'converter-history'

CURRENT_SCHEMA_VERSION = 1


class PersistedDataError(ValueError):
	pass


def _as_utc(value: datetime) -> datetime:
	if value.tzinfo is None:
		return value.replace(tzinfo=UTC)
	return value.astimezone(UTC)


class RateSnapshotSchema(BaseModel):
	schema_version: Literal[1] = CURRENT_SCHEMA_VERSION
	base: str = Field(..., min_length=3, max_length=5)
	rates: dict[str, float]
	timestamp: datetime

	@field_validator('timestamp')
	@classmethod
	def timestamp_utc(cls, v: datetime):
		return _as_utc(v)


class ConversionEntrySchema(BaseModel):
	id: int
	source: str
	target: str
	amount: float
	result: float
	timestamp: datetime

	@field_validator('timestamp')
	@classmethod
	def timestamp_utc(cls, v: datetime):
		return _as_utc(v)


class HistorySchema(BaseModel):
	schema_version: Literal[1] = CURRENT_SCHEMA_VERSION
	entries: list[ConversionEntrySchema] = Field(default_factory=list)


def _load_json(raw: str) -> Any:
	try:
		return json.loads(raw)
	except (TypeError, ValueError) as e:
		raise PersistedDataError(f'Invalid json data: {e}') from e


def _check_version(data: dict) -> None:
	version = data.get('schema_version')
	if version != CURRENT_SCHEMA_VERSION:
		raise PersistedDataError(f'Unsupported schema version: {version!r}')


def encode_snapshot(snapshot: RateSnapshot) -> str:
	return RateSnapshotSchema(
		base=snapshot.table.base,
		rates=dict(snapshot.table.rates),
		timestamp=snapshot.timestamp,
	).model_dump_json()


def decode_snapshot(raw: str, default_base: str) -> RateSnapshot:
	"""Parse a stored snapshot.

	Legacy payloads carry no base currency, so ``default_base`` is assumed.
	Raises PersistedDataError for anything that cannot be trusted.
	"""
	data = _load_json(raw)
	if not isinstance(data, dict):
		raise PersistedDataError('Rate snapshot must be a JSON object')

	if 'schema_version' not in data:
		data = {
			'schema_version': CURRENT_SCHEMA_VERSION,
			'base': default_base,
			'rates': data.get('rates'),
			'timestamp': data.get('timestamp'),
		}
	_check_version(data)

	try:
		record = RateSnapshotSchema.model_validate(data)
		table = RateTable(base=record.base, rates=record.rates)
	except (ValidationError, ValueError) as e:
		raise PersistedDataError(f'Invalid rate snapshot: {e}') from e

	return RateSnapshot(table=table, timestamp=record.timestamp)


def encode_history(records: list[ConversionRecord] | tuple[ConversionRecord, ...]) -> str:
	return HistorySchema(
		entries=[
			ConversionEntrySchema(
				id=r.id,
				source=r.source,
				target=r.target,
				amount=r.amount,
				result=r.result,
				timestamp=r.timestamp,
			)
			for r in records
		]
	).model_dump_json()


def decode_history(raw: str) -> list[ConversionRecord]:
	data = _load_json(raw)

	if isinstance(data, list):
		data = {
			'schema_version': CURRENT_SCHEMA_VERSION,
			'entries': [_migrate_legacy_entry(entry) for entry in data],
		}
	elif not isinstance(data, dict):
		raise PersistedDataError('History must be a JSON object or list')
	_check_version(data)

	try:
		record = HistorySchema.model_validate(data)
	except ValidationError as e:
		raise PersistedDataError(f'Invalid history: {e}') from e

	return [
		ConversionRecord(
			id=e.id,
			source=e.source,
			target=e.target,
			amount=e.amount,
			result=e.result,
			timestamp=e.timestamp,
		)
		for e in record.entries
	]


def _migrate_legacy_entry(entry: Any) -> Any:
	if not isinstance(entry, dict):
		return entry
	return {
		'id': entry.get('id'),
		'source': entry.get('from'),
		'target': entry.get('to'),
		'amount': entry.get('amount'),
		'result': entry.get('result'),
		'timestamp': entry.get('timestamp'),
	}
