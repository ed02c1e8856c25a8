"""
Wasla - Schemas: Activity log
"""
from pydantic import BaseModel
from typing import Optional, Any, List
from datetime import datetime


class ActivityLogResponse(BaseModel):
    id: int
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[int] = None
    entity_name: Optional[str] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    details: Optional[Any] = None
    timestamp: datetime

    class Config:
        from_attributes = True


class ActivityLogGroup(BaseModel):
    date: str
    entries: List[ActivityLogResponse]
