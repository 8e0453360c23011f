from dataclasses import dataclass
from typing import Optional
import logging

from starlette.concurrency import run_in_threadpool

from .area_code import extract_area_code
from .event_store import CallEventStore
from .notifier import RealtimeNotifier
from .routing_table import RoutingTable, RoutingRule
from .schemas import CallPayload

logger = logging.getLogger(__name__)


@dataclass
class RoutingDecision:
    area_code: str
    match: Optional[RoutingRule] = None
    record: Optional[dict] = None

    @property
    def extension(self) -> str:
        """Extension to hand back to the PBX, "" means use failover"""
        return self.match.extension if self.match else ""

    @property
    def persisted(self) -> bool:
        return self.record is not None


class RoutingWebhookHandler:
    """Runs one webhook call: extract, resolve, persist, notify.

    Nothing in here may stop the caller from answering the PBX, so lookup
    and logging failures are logged and the call carries on.
    """

    def __init__(
        self,
        routing_table: RoutingTable,
        store: CallEventStore,
        notifier: RealtimeNotifier,
        event_name: str,
    ):
        self.routing_table = routing_table
        self.store = store
        self.notifier = notifier
        self.event_name = event_name

    async def handle(self, payload: CallPayload) -> RoutingDecision:
        area_code = extract_area_code(payload.CALLER_ID_NUMBER)
        logger.info(
            f"Call {payload.CALL_ID} from {payload.CALLER_ID_NUMBER!r} "
            f"to {payload.DIALED_NUMBER!r}, area code {area_code!r}"
        )

        try:
            match = await run_in_threadpool(self.routing_table.resolve, area_code)
        except Exception:
            logger.exception("Routing lookup failed, falling back to no match")
            match = None

        decision = RoutingDecision(area_code=area_code, match=match)

        try:
            decision.record = await run_in_threadpool(self.store.append, payload, area_code, match)
        except Exception as e:
            logger.error(f"Could not log call {payload.CALL_ID} to {self.store.table_name}: {e}")

        if decision.persisted:
            try:
                self.notifier.publish_nowait(self.event_name, decision.record)
            except Exception as e:
                logger.error(f"Could not schedule {self.event_name} broadcast: {e}")

        return decision
