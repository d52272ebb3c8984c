import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import cleanup_dependencies, deps, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import health, rates
from config.logging_config import configure_logging
from config.settings import get_settings

settings = get_settings()
configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info(f'Starting {settings.APP_NAME}...')

	init_dependencies()
	if deps.rate_service is None:
		raise RuntimeError('Exchange rate service not initialized')

	if deps.refresher is not None:
		deps.refresher.start()
	else:
		await deps.rate_service.get_exchange_rates()

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
	logger.error(f'Unhandled exception: {exc}', exc_info=True)
	return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(rates.router)
app.include_router(health.router)
register_exception_handlers(app)
