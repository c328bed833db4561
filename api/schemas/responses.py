from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from application.services import SessionState, SessionStatus


class CurrencyResponse(BaseModel):
	code: str = Field(..., description='Currency code')
	name: str = Field(..., description='Display name')
	symbol: str = Field(..., description='Display symbol')


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[CurrencyResponse] = Field(description='Currencies offered by the converter')


class ConversionRecordResponse(BaseModel):
	id: int = Field(..., description='Time-ordered record identifier')
	source: str = Field(..., description='Source currency code')
	target: str = Field(..., description='Target currency code')
	amount: float = Field(..., description='Amount converted')
	result: float = Field(..., description='Converted amount, unrounded')
	display: str = Field(..., description='Result formatted to two decimals')
	timestamp: datetime = Field(..., description='When the conversion happened')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'id': 1730800000000,
				'source': 'ARS',
				'target': 'USD',
				'amount': 1000.0,
				'result': 1.1,
				'display': '$ 1.10 USD',
				'timestamp': '2025-11-05T10:30:00Z',
			}
		}
	)


class HistoryResponse(BaseModel):
	entries: list[ConversionRecordResponse] = Field(description='Newest first')


class RatesResponse(BaseModel):
	base: str = Field(..., description='Base currency of the table')
	rates: dict[str, float] = Field(..., description='Units of each currency per base unit')
	timestamp: datetime = Field(..., description='When the rates were captured')
	stale: bool = Field(False, description='Older than the configured maximum age')


class SessionStateResponse(BaseModel):
	state: SessionState
	status: SessionStatus
	is_online: bool
	busy: bool
	error_message: str | None = None
	source: str
	target: str
	last_update: datetime | None = None
	can_convert: bool
	result: ConversionRecordResponse | None = None
