"""Module: main."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pawfund.api.error_handlers import register_error_handlers
from pawfund.api.v1.api import api_router
from pawfund.core.config import settings
from pawfund.core.logging_config import setup_logging
from pawfund.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file)
    # Schema for local/dev runs; deployed databases are migrated with Alembic.
    init_db()
    logger.info("PawFund API started")
    yield
    logger.info("PawFund API shutting down")


app = FastAPI(title="PawFund API", version="0.1.0", lifespan=lifespan)

app.include_router(api_router, prefix="/api/v1")
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
