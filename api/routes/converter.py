from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_currency_service, get_session
from api.schemas import (
	ConversionRecordResponse,
	ConversionRequest,
	CurrencyResponse,
	HistoryResponse,
	RatesResponse,
	SelectionRequest,
	SessionStateResponse,
	SupportedCurrenciesResponse,
)
from application.services import ConverterSession, CurrencyService
from domain.models.currency import ConversionRecord

router = APIRouter(prefix='/api', tags=['converter'])

SessionDep = Annotated[ConverterSession, Depends(get_session)]
CurrenciesDep = Annotated[CurrencyService, Depends(get_currency_service)]


def _record_response(record: ConversionRecord, currencies: CurrencyService) -> ConversionRecordResponse:
	return ConversionRecordResponse(
		id=record.id,
		source=record.source,
		target=record.target,
		amount=record.amount,
		result=record.result,
		display=currencies.format_amount(record.result, record.target),
		timestamp=record.timestamp,
	)


def _state_response(session: ConverterSession, currencies: CurrencyService) -> SessionStateResponse:
	return SessionStateResponse(
		state=session.state,
		status=session.status,
		is_online=session.is_online,
		busy=session.busy,
		error_message=session.error_message,
		source=session.source,
		target=session.target,
		last_update=session.last_update,
		can_convert=session.can_convert,
		result=_record_response(session.result, currencies) if session.result else None,
	)


@router.get('/state', response_model=SessionStateResponse, summary='Current session state')
async def get_state(session: SessionDep, currencies: CurrenciesDep) -> SessionStateResponse:
	return _state_response(session, currencies)


@router.post('/refresh', response_model=SessionStateResponse, summary='Fetch fresh rates')
async def refresh_rates(session: SessionDep, currencies: CurrenciesDep) -> SessionStateResponse:
	await session.refresh()
	return _state_response(session, currencies)


@router.post(
	'/convert',
	response_model=ConversionRecordResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an amount with the current rates',
)
async def convert_amount(
	request: ConversionRequest, session: SessionDep, currencies: CurrenciesDep
) -> ConversionRecordResponse:
	record = await session.convert(request.amount, request.source, request.target)
	if record is None:
		raise HTTPException(
			status_code=status.HTTP_409_CONFLICT,
			detail=session.error_message or 'Rates are not available right now',
		)
	return _record_response(record, currencies)


@router.post('/swap', response_model=SessionStateResponse, summary='Swap source and target')
async def swap_currencies(session: SessionDep, currencies: CurrenciesDep) -> SessionStateResponse:
	session.swap()
	return _state_response(session, currencies)


@router.put('/selection', response_model=SessionStateResponse, summary='Change the selected pair')
async def select_currencies(
	request: SelectionRequest, session: SessionDep, currencies: CurrenciesDep
) -> SessionStateResponse:
	if request.source is not None:
		session.select_source(request.source)
	if request.target is not None:
		session.select_target(request.target)
	return _state_response(session, currencies)


@router.get('/history', response_model=HistoryResponse, summary='Past conversions')
async def get_history(session: SessionDep, currencies: CurrenciesDep) -> HistoryResponse:
	return HistoryResponse(entries=[_record_response(r, currencies) for r in session.history])


@router.delete('/history', status_code=status.HTTP_204_NO_CONTENT, summary='Clear history')
async def clear_history(session: SessionDep) -> None:
	await session.clear_history()


@router.get('/currencies', response_model=SupportedCurrenciesResponse, summary='List supported currencies')
async def get_supported_currencies(currencies: CurrenciesDep) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		currencies=[
			CurrencyResponse(code=c.code, name=c.name, symbol=c.symbol)
			for c in currencies.get_supported_currencies()
		]
	)


@router.get('/rates', response_model=RatesResponse, summary='Current rate table')
async def get_rates(session: SessionDep) -> RatesResponse:
	snapshot = session.snapshot
	if snapshot is None:
		raise HTTPException(
			status_code=status.HTTP_404_NOT_FOUND,
			detail=session.error_message or 'No rates loaded',
		)
	return RatesResponse(
		base=snapshot.table.base,
		rates=dict(snapshot.table.rates),
		timestamp=snapshot.timestamp,
		stale=session.rates.is_stale(),
	)
