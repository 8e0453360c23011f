from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class CallPayload(BaseModel):
    """Fields posted by a GoTo Connect dial plan node.

    Every field is optional; the PBX must always get an answer, so nothing
    here is allowed to reject a request.
    """
    PBX_ID: Optional[str] = None
    CALL_ID: Optional[str] = None
    DIALED_NUMBER: Optional[str] = None
    CALLER_ID_NUMBER: Optional[str] = None
    CALLER_ID_NAME: Optional[str] = None

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "PBX_ID": "0127d974-f9f3-0704-2dee-000100420001",
                "CALL_ID": "8e8bd7e8-5a2c-4d0a-9a0b-4f9c0b7c3d11",
                "DIALED_NUMBER": "+18005550100",
                "CALLER_ID_NUMBER": "+14155551234",
                "CALLER_ID_NAME": "JANE DOE",
            }
        }
    }

    @field_validator('*', mode='before')
    @classmethod
    def coerce_to_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        return None


class RemoteCCEventRecord(BaseModel):
    id: int
    PBX_ID: Optional[str] = None
    CALL_ID: Optional[str] = None
    CALLER_ID_NAME: Optional[str] = None
    CALLER_ID_NUMBER: Optional[str] = None
    DIALED_NUMBER: Optional[str] = None
    AREA_CODE: Optional[str] = None
    MATCHED_STATE: Optional[str] = None
    MATCHED_EXTENSION: Optional[str] = None
    timestamp: Optional[datetime] = None


class NotifyCallRecord(BaseModel):
    id: int
    PBX_ID: Optional[str] = None
    CALL_ID: Optional[str] = None
    DIALED_NUMBER: Optional[str] = None
    CALLER_ID_NUMBER: Optional[str] = None
    CALLER_ID_NAME: Optional[str] = None
    timestamp: Optional[datetime] = None
    CALLER_AREA_CODE: Optional[str] = None
    State: Optional[str] = None
    Extension: Optional[str] = None
