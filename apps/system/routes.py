# ============================================================================
# apps/system/routes.py - Liveness and health routes
# ============================================================================

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from .schemas import SystemHealth
from shared.database import engine, lookup_engine, check_connection
from config import APP_VERSION, ENABLED_APPS

router = APIRouter(prefix="", tags=["system"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness message for the PBX admin and load balancers"""
    return "GoTo Connect Remote Call Control listener is running."


@router.get("/health", response_model=SystemHealth)
async def health_check():
    """Report connectivity of the event log and the routing lookup database"""
    event_db = await run_in_threadpool(check_connection, engine)
    lookup_db = await run_in_threadpool(check_connection, lookup_engine)

    return SystemHealth(
        status="healthy" if event_db else "degraded",
        version=APP_VERSION,
        database_status={
            "events": "connected" if event_db else "error",
            "routing_table": "connected" if lookup_db else "error",
        },
        active_apps=ENABLED_APPS
    )
