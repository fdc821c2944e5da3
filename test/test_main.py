"""
Test-specific FastAPI Application

Same routes and handlers as production; storage is opened per test by the
`database` fixture instead of the lifespan.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """
    Minimal lifespan for testing.

    httpx.ASGITransport does not send lifespan events; the database fixture wires
    the container and creates the schema for every test.
    """
    Logger.base.info('🧪 [Test App] Starting up...')
    yield
    Logger.base.info('👋 [Test App] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(
    lifespan=lifespan_for_tests,
    title_suffix=' (Test)',
    description='Test Application',
    service_name='test-mealshare-service',
)
