"""
Wasla - Schemas: Payments
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from wasla.models.payment import PaymentType


class PaymentCreate(BaseModel):
    subscriber_id: int
    amount: float = Field(..., gt=0)
    payment_date: Optional[date] = None    # Defaults to today
    payment_type: PaymentType = PaymentType.SUBSCRIPTION
    payment_method: str = "cash"
    notes: Optional[str] = None


class PaymentResponse(BaseModel):
    id: int
    tenant_id: int
    subscriber_id: int
    amount: float
    payment_date: date
    payment_type: PaymentType
    payment_method: str
    notes: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
