import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import ConversionError, InvalidCurrencyError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidCurrencyError)
	async def invalid_currency_handler(request: Request, exc: InvalidCurrencyError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(ConversionError)
	async def conversion_error_handler(request: Request, exc: ConversionError):
		logger.warning(f'Conversion failed: {exc}')
		return JSONResponse(
			status_code=422, content={'detail': 'Rate not available', 'reason': str(exc)}
		)
