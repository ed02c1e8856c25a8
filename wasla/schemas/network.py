"""
Wasla - Schemas: Routers
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from wasla.models.router import RouterStatus


class RouterBase(BaseModel):
    name: str = Field(..., max_length=200)
    model: Optional[str] = None
    ip: Optional[str] = None
    location: Optional[str] = None
    status: RouterStatus = RouterStatus.ONLINE
    total_ports: int = Field(0, ge=0)
    notes: Optional[str] = None


class RouterCreate(RouterBase):
    pass


class RouterUpdate(BaseModel):
    name: Optional[str] = None
    model: Optional[str] = None
    ip: Optional[str] = None
    location: Optional[str] = None
    status: Optional[RouterStatus] = None
    total_ports: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class RouterResponse(RouterBase):
    id: int
    tenant_id: int
    subscriber_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True
