# ============================================================================
# apps/system/schemas.py
# ============================================================================

from pydantic import BaseModel
from typing import Dict, List


class SystemHealth(BaseModel):
    status: str
    version: str
    database_status: Dict[str, str]
    active_apps: List[str]
