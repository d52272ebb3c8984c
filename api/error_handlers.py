import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.rates import RateException

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(RateException)
	async def rate_error_handler(request: Request, exc: RateException):
		logger.error(f'Rate error: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)
