from sqlalchemy import Column, Integer, Text, DateTime, inspect
from sqlalchemy.sql import func
from shared.database import Base, LookupBase
from config import ROUTING_TABLE_NAME


class StateAreaCode(LookupBase):
    """One row of the externally maintained routing table.

    AreaCodes holds a comma-separated list such as "415, 650".
    """
    __tablename__ = ROUTING_TABLE_NAME

    id = Column(Integer, primary_key=True, autoincrement=True)
    state = Column("State", Text)
    area_codes = Column("AreaCodes", Text)
    extension = Column("Extension", Text)

    def __repr__(self):
        return f"<StateAreaCode(state={self.state}, area_codes={self.area_codes}, extension={self.extension})>"


class CallFieldsMixin:
    """Fields posted by the PBX dial plan node"""
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    pbx_id = Column("PBX_ID", Text)
    call_id = Column("CALL_ID", Text)
    caller_id_name = Column("CALLER_ID_NAME", Text)
    caller_id_number = Column("CALLER_ID_NUMBER", Text)
    dialed_number = Column("DIALED_NUMBER", Text)
    timestamp = Column(DateTime, server_default=func.now(), index=True)

    # Column keys as exposed in JSON records, in order
    record_columns = ()

    def to_record(self) -> dict:
        """Serialize using the stored column names as keys"""
        mapper = inspect(type(self))
        record = {}
        for key in self.record_columns:
            prop = mapper.get_property_by_column(self.__table__.columns[key])
            record[key] = getattr(self, prop.key)
        return record


class RemoteCCEvent(CallFieldsMixin, Base):
    """Remote Call Control event with its routing decision"""
    __tablename__ = "events"

    area_code = Column("AREA_CODE", Text)
    matched_state = Column("MATCHED_STATE", Text)
    matched_extension = Column("MATCHED_EXTENSION", Text)

    record_columns = (
        "id", "PBX_ID", "CALL_ID", "CALLER_ID_NAME", "CALLER_ID_NUMBER", "DIALED_NUMBER",
        "AREA_CODE", "MATCHED_STATE", "MATCHED_EXTENSION", "timestamp",
    )

    def __repr__(self):
        return f"<RemoteCCEvent(id={self.id}, call_id={self.call_id}, area_code={self.area_code}, extension={self.matched_extension})>"


class NotifyCall(CallFieldsMixin, Base):
    """HTTP Notify call record, logged only"""
    __tablename__ = "calls"

    area_code = Column("CALLER_AREA_CODE", Text)
    matched_state = Column("State", Text)
    matched_extension = Column("Extension", Text)

    record_columns = (
        "id", "PBX_ID", "CALL_ID", "DIALED_NUMBER", "CALLER_ID_NUMBER", "CALLER_ID_NAME",
        "timestamp", "CALLER_AREA_CODE", "State", "Extension",
    )

    def __repr__(self):
        return f"<NotifyCall(id={self.id}, call_id={self.call_id}, area_code={self.area_code}, extension={self.matched_extension})>"
