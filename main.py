# ============================================================================
# main.py - Remote Call Control listener
# ============================================================================

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
from contextlib import asynccontextmanager

from config import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION,
    CORS_ORIGINS, HOST, PORT, LOG_LEVEL, ENABLED_APPS
)
from shared.database import init_database
from shared.logging import setup_logging

from apps import available_routers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application on startup and cleanup on shutdown"""
    setup_logging()
    logger.info(f"Starting {APP_NAME}...")

    if init_database():
        logger.info("Event log database ready")
    else:
        logger.warning("Event log database initialization had issues, calls will still be routed")

    logger.info(f"POST endpoints: http://{HOST}:{PORT}/remotecc, http://{HOST}:{PORT}/notify")
    logger.info(f"REST endpoints: http://{HOST}:{PORT}/events, http://{HOST}:{PORT}/calls")
    logger.info(f"WebSocket endpoint: ws://{HOST}:{PORT}/ws")

    yield

    logger.info(f"Shutting down {APP_NAME}...")


# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for app_name in ENABLED_APPS:
    app.include_router(available_routers[app_name])
    logger.info(f"{app_name} app loaded")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL
    )
