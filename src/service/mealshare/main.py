"""
MealShare Service - Main Application
Handles registration, login, meal publishing and reservations.

Run:
    granian --interface asgi src.service.mealshare.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    # Startup
    Logger.base.info('🚀 [MealShare] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name='mealshare-service')
    tracing.setup()
    Logger.base.info('📊 [MealShare] OpenTelemetry tracing configured')

    # Wire dependency injection for use cases and controllers
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [MealShare] Dependency injection wired')

    # Open storage: create tables idempotently (fail-fast)
    database = container.database()
    tracing.instrument_sqlalchemy(engine=database.engine)
    await database.create_db_and_tables()

    Logger.base.info('✅ [MealShare] Startup complete')

    yield

    # Shutdown
    Logger.base.info('🛑 [MealShare] Shutting down...')

    await database.dispose()

    # Shutdown tracing (flush remaining spans)
    tracing.shutdown()
    Logger.base.info('📊 [MealShare] Tracing shutdown complete')

    # Unwire DI and drop singletons bound to this loop
    container.unwire()
    cleanup()
    Logger.base.info('👋 [MealShare] Shutdown complete')


app = create_app(lifespan=lifespan)
