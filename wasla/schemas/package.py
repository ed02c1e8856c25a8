"""
Wasla - Schemas: Packages
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PackageBase(BaseModel):
    name: str = Field(..., max_length=200)
    speed: int = Field(..., gt=0)
    price: float = Field(..., ge=0)
    duration_days: int = Field(30, ge=1)
    description: Optional[str] = None


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: Optional[str] = None
    speed: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, ge=0)
    duration_days: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class PackageResponse(PackageBase):
    id: int
    tenant_id: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
