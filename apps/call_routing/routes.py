from fastapi import APIRouter, Depends, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl
import json
import logging

from config import ROUTING_CACHE_SECONDS
from shared.auth import verify_api_key
from shared.database import SessionLocal, LookupSessionLocal
from .event_store import CallEventStore, EventStoreError, remote_cc_store, notify_store
from .notifier import RealtimeNotifier, get_notifier, NEW_EVENT, NEW_CALL
from .routing_table import RoutingTable
from .schemas import CallPayload, RemoteCCEventRecord, NotifyCallRecord
from .services import RoutingWebhookHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["call-routing"])

_routing_table = RoutingTable(LookupSessionLocal, cache_seconds=ROUTING_CACHE_SECONDS)
_remote_cc_store = remote_cc_store(SessionLocal)
_notify_store = notify_store(SessionLocal)


def get_routing_table() -> RoutingTable:
    return _routing_table


def get_remote_cc_store() -> CallEventStore:
    return _remote_cc_store


def get_notify_store() -> CallEventStore:
    return _notify_store


async def read_call_payload(request: Request) -> CallPayload:
    """Parse a JSON or form body; anything unreadable becomes an empty payload"""
    content_type = request.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            data = await request.json()
        elif "form" in content_type:
            data = dict(await request.form())
        else:
            body = (await request.body()).decode("utf-8", errors="replace").strip()
            if body.startswith("{"):
                data = json.loads(body)
            else:
                data = dict(parse_qsl(body))
    except Exception as e:
        logger.warning(f"Unreadable webhook body ({content_type or 'no content type'}): {e}")
        data = {}

    if not isinstance(data, dict):
        data = {}
    try:
        return CallPayload.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed webhook fields: {e}")
        return CallPayload()


def _log_request(name: str, request: Request, payload: CallPayload) -> None:
    logger.info(f"--- Incoming {name} POST ---")
    logger.debug(f"Headers: {dict(request.headers)}")
    logger.info(f"Body: {payload.model_dump()}")


@router.post("/remotecc", response_class=PlainTextResponse)
async def remote_call_control(
    request: Request,
    routing_table: RoutingTable = Depends(get_routing_table),
    store: CallEventStore = Depends(get_remote_cc_store),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    """Remote Call Control node: answer with the extension to route to.

    An empty body tells the dial plan there is no route and to fail over.
    """
    payload = await read_call_payload(request)
    _log_request("RemoteCC", request, payload)

    handler = RoutingWebhookHandler(routing_table, store, notifier, NEW_EVENT)
    decision = await handler.handle(payload)

    logger.info(f"Responding to call {payload.CALL_ID} with extension {decision.extension!r}")
    return PlainTextResponse(decision.extension, status_code=200)


@router.post("/notify", response_class=PlainTextResponse)
async def http_notify(
    request: Request,
    routing_table: RoutingTable = Depends(get_routing_table),
    store: CallEventStore = Depends(get_notify_store),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    """HTTP Notify node: log the call with its lookup result and acknowledge"""
    payload = await read_call_payload(request)
    _log_request("HTTP Notify", request, payload)

    handler = RoutingWebhookHandler(routing_table, store, notifier, NEW_CALL)
    await handler.handle(payload)
    return PlainTextResponse("Received", status_code=200)


def _list_records(store: CallEventStore, limit: Optional[int]):
    try:
        return store.list(limit=limit)
    except EventStoreError as e:
        logger.error(f"Error reading {store.table_name}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/events", response_model=List[RemoteCCEventRecord])
def list_events(
    limit: Optional[int] = Query(None, ge=1, description="Return at most this many events"),
    store: CallEventStore = Depends(get_remote_cc_store),
    auth: Dict[str, Any] = Depends(verify_api_key),
):
    """Remote Call Control events, newest first"""
    return _list_records(store, limit)


@router.get("/calls", response_model=List[NotifyCallRecord])
def list_calls(
    limit: Optional[int] = Query(None, ge=1, description="Return at most this many calls"),
    store: CallEventStore = Depends(get_notify_store),
    auth: Dict[str, Any] = Depends(verify_api_key),
):
    """HTTP Notify calls, newest first"""
    return _list_records(store, limit)


@router.websocket("/ws")
async def events_socket(websocket: WebSocket, notifier: RealtimeNotifier = Depends(get_notifier)):
    """Push channel for dashboards: one message per logged call"""
    await websocket.accept()
    observer = websocket.send_json
    notifier.subscribe(observer)
    try:
        # Clients only listen; incoming text keeps the connection alive
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        notifier.unsubscribe(observer)
