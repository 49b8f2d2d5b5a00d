from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrconsole.api.v1.router import api_router
from hrconsole.core.config import settings
from hrconsole.core.context import ConsoleContext
from hrconsole.core.logging import configure_logging
from hrconsole.core.session import SessionStore
from hrconsole.services.hr_api_client import hr_api_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    try:
        await hr_api_client.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize HrApiClient — continuing without remote API")

    console = ConsoleContext(settings, hr_api_client, SessionStore(settings.SESSION_FILE))
    await console.restore()
    application.state.console = console
    yield
    await console.close()
    await hr_api_client.close()


app = FastAPI(
    title="HR Console API",
    description="Employee management and leave tracking console",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "HR Console API"}
