from typing import Callable, List, Optional, Type
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from .models import CallFieldsMixin, RemoteCCEvent, NotifyCall
from .routing_table import RoutingRule
from .schemas import CallPayload

logger = logging.getLogger(__name__)


class EventStoreError(Exception):
    """Raised when the event log cannot be written or read"""


class CallEventStore:
    """Append-only log of webhook calls backed by one table.

    Each append is a single INSERT committed in its own session; ids and
    timestamps are assigned by the database.
    """

    def __init__(self, session_factory: Callable[[], Session], model: Type[CallFieldsMixin]):
        self.session_factory = session_factory
        self.model = model

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def append(self, payload: CallPayload, area_code: str, match: Optional[RoutingRule]) -> dict:
        """Persist one event and return its stored record (id and timestamp included)"""
        row = self.model(
            pbx_id=payload.PBX_ID,
            call_id=payload.CALL_ID,
            caller_id_name=payload.CALLER_ID_NAME,
            caller_id_number=payload.CALLER_ID_NUMBER,
            dialed_number=payload.DIALED_NUMBER,
            area_code=area_code,
            matched_state=match.state if match else None,
            matched_extension=match.extension if match else None,
        )
        db = self.session_factory()
        try:
            db.add(row)
            db.commit()
            db.refresh(row)
            record = row.to_record()
        except SQLAlchemyError as e:
            db.rollback()
            raise EventStoreError(f"Failed to store event in {self.table_name}: {e}") from e
        finally:
            db.close()

        logger.debug(f"Stored {self.table_name} row {record['id']}")
        return record

    def list(self, limit: Optional[int] = None) -> List[dict]:
        """Return stored records newest first"""
        db = self.session_factory()
        try:
            query = db.query(self.model).order_by(self.model.timestamp.desc(), self.model.id.desc())
            if limit:
                query = query.limit(limit)
            return [row.to_record() for row in query.all()]
        except SQLAlchemyError as e:
            raise EventStoreError(f"Failed to read {self.table_name}: {e}") from e
        finally:
            db.close()


def remote_cc_store(session_factory: Callable[[], Session]) -> CallEventStore:
    return CallEventStore(session_factory, RemoteCCEvent)


def notify_store(session_factory: Callable[[], Session]) -> CallEventStore:
    return CallEventStore(session_factory, NotifyCall)
