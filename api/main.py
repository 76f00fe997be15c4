import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import build_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import health, rates
from config.settings import get_settings

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logging.getLogger('httpx').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info(f'Starting {settings.APP_NAME} {settings.VERSION}...')

	deps = build_dependencies(settings)
	await deps.db.create_tables()
	logger.info('Database tables created')
	app.state.deps = deps

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await deps.close()


app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
	logger.error(f'Unhandled exception: {exc}', exc_info=True)
	return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(rates.router)
app.include_router(health.router)
register_exception_handlers(app)


if __name__ == '__main__':
	import uvicorn

	logger.info(f'Starting server on {settings.HOST}:{settings.PORT}')
	uvicorn.run(
		'api.main:app',
		host=settings.HOST,
		port=settings.PORT,
		reload=settings.DEBUG,
		log_level=settings.LOG_LEVEL.lower(),
	)
