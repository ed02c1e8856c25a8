"""
Wasla - Schemas: Card sales
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from wasla.models.sale import SaleType


class SaleCreate(BaseModel):
    sale_type: SaleType = SaleType.RETAIL
    count: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    sale_date: Optional[date] = None    # Defaults to today
    notes: Optional[str] = None


class SaleUpdate(BaseModel):
    sale_type: Optional[SaleType] = None
    count: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    sale_date: Optional[date] = None
    notes: Optional[str] = None


class SaleResponse(BaseModel):
    id: int
    tenant_id: int
    sale_type: SaleType
    count: int
    price: float
    sale_date: date
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
