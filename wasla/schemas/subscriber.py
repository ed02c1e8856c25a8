"""
Wasla - Schemas: Subscribers
"""
from pydantic import BaseModel, Field, computed_field
from typing import Optional
from datetime import date, datetime
from wasla.models.subscriber import SubscriptionType
from wasla.services.subscriber_status import SubscriberStatus, days_left as count_days_left, subscriber_status


class SubscriberBase(BaseModel):
    name: str = Field(..., max_length=200)
    phone: Optional[str] = None
    address: Optional[str] = None

    # Service
    subscription_type: SubscriptionType = SubscriptionType.MONTHLY
    speed: Optional[int] = Field(None, ge=0)
    max_devices: int = Field(1, ge=1)
    package_id: Optional[int] = None
    package_name: Optional[str] = None
    package_price: float = Field(0, ge=0)
    router_id: Optional[int] = None

    # Period
    start_date: date
    expire_date: date

    balance: float = 0
    notes: Optional[str] = None


class SubscriberCreate(SubscriberBase):
    pass


class SubscriberUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    subscription_type: Optional[SubscriptionType] = None
    speed: Optional[int] = Field(None, ge=0)
    max_devices: Optional[int] = Field(None, ge=1)
    package_id: Optional[int] = None
    package_name: Optional[str] = None
    package_price: Optional[float] = Field(None, ge=0)
    router_id: Optional[int] = None
    start_date: Optional[date] = None
    expire_date: Optional[date] = None
    balance: Optional[float] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SubscriberResponse(SubscriberBase):
    id: int
    tenant_id: int
    is_stopped: bool
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def status(self) -> SubscriberStatus:
        return subscriber_status(self.expire_date, self.balance, self.is_stopped)

    @computed_field
    @property
    def days_left(self) -> int:
        return count_days_left(self.expire_date)

    class Config:
        from_attributes = True


class RenewRequest(BaseModel):
    """Extends the subscription. Uses the package duration when days is omitted."""
    days: Optional[int] = Field(None, ge=1, le=3650)
    package_id: Optional[int] = None
    amount: Optional[float] = Field(None, ge=0)
    record_payment: bool = True
    notes: Optional[str] = None
