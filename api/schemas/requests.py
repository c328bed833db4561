from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionRequest(BaseModel):
	amount: float = Field(..., ge=0, allow_inf_nan=False)
	source: str | None = Field(None, min_length=3, max_length=5)
	target: str | None = Field(None, min_length=3, max_length=5)

	@field_validator('source', 'target')
	@classmethod
	def uppercase_currency(cls, v: str | None):
		return v.upper() if v is not None else v

	model_config = ConfigDict(
		json_schema_extra={'example': {'amount': 1000, 'source': 'ARS', 'target': 'USD'}}
	)


class SelectionRequest(BaseModel):
	source: str | None = Field(None, min_length=3, max_length=5)
	target: str | None = Field(None, min_length=3, max_length=5)

	@field_validator('source', 'target')
	@classmethod
	def uppercase_currency(cls, v: str | None):
		return v.upper() if v is not None else v
