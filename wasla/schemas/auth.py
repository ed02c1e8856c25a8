"""
Wasla - Schemas: Auth and tenant signup
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from wasla.models.user import UserRole
from wasla.models.tenant import SubscriptionStatus


# --- Auth ---
class LoginRequest(BaseModel):
    username: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    id: int
    tenant_id: int
    name: str
    username: str
    phone: Optional[str] = None
    role: UserRole
    permissions: List[str] = []
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


# --- Tenant signup ---
class TenantCreate(BaseModel):
    name: str = Field(..., max_length=200)
    slug: str = Field(..., max_length=100, pattern=r"^[a-z0-9][a-z0-9-]*$")
    phone: Optional[str] = None
    address: Optional[str] = None

    # Owner account
    owner_name: str = Field(..., max_length=200)
    owner_username: str = Field(..., max_length=100)
    owner_password: str = Field(..., min_length=6)


class TenantResponse(BaseModel):
    id: int
    name: str
    slug: str
    phone: Optional[str] = None
    address: Optional[str] = None
    subscription_status: SubscriptionStatus
    subscription_ends_at: Optional[datetime] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
