"""
Wasla - Schemas: Tenant administration
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from wasla.models.tenant import SubscriptionStatus
from wasla.schemas.auth import TenantResponse


class TenantAdminResponse(TenantResponse):
    owner_name: Optional[str] = None
    owner_username: Optional[str] = None
    subscribers_count: int = 0


class TenantToggleRequest(BaseModel):
    is_active: bool


class SubscriptionUpdateRequest(BaseModel):
    subscription_status: SubscriptionStatus
    subscription_ends_at: Optional[datetime] = None


class ExtendTrialRequest(BaseModel):
    days: int = Field(..., ge=1, le=365)


class ActivateSubscriptionRequest(BaseModel):
    months: int = Field(..., ge=1, le=60)


class TrialStatusResponse(BaseModel):
    subscription_status: SubscriptionStatus
    subscription_ends_at: Optional[datetime] = None
    days_left: Optional[int] = None
    show_alert: bool = False
    is_expired: bool = False
    is_urgent: bool = False


class PlatformStats(BaseModel):
    total_tenants: int
    active_tenants: int
    trial_tenants: int
    paid_tenants: int
    inactive_tenants: int
    expiring_trials: int
    total_subscribers: int
