"""
Wasla - Schemas: Staff accounts
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from wasla.models.user import UserRole


class StaffCreate(BaseModel):
    name: str = Field(..., max_length=200)
    username: str = Field(..., max_length=100)
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None
    role: UserRole = UserRole.SUBS
    permissions: List[str] = []


class StaffUpdate(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    phone: Optional[str] = None
    role: Optional[UserRole] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
