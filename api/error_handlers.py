import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.rates import (
	InsufficientHistoryError,
	ParseError,
	StoreReadError,
	UnsupportedCurrencyError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UnsupportedCurrencyError)
	async def unsupported_currency_handler(request: Request, exc: UnsupportedCurrencyError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(ParseError)
	async def parse_error_handler(request: Request, exc: ParseError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(InsufficientHistoryError)
	async def insufficient_history_handler(request: Request, exc: InsufficientHistoryError):
		logger.info(f'{request.url.path} :: {exc}')
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(StoreReadError)
	async def store_read_error_handler(request: Request, exc: StoreReadError):
		logger.error(f'Rate store error: {exc}')
		return JSONResponse(status_code=503, content={'detail': 'Rate store unavailable'})
