"""
Wasla - User model
Staff accounts of each network. Roles gate which sections a user may touch.
"""
from sqlalchemy import Column, Integer, String, Boolean, Enum, JSON, UniqueConstraint
from wasla.models.base import TenantBase
import enum


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"   # Platform operator
    OWNER = "owner"               # Owner of the network
    ADMIN = "admin"
    SUBS = "subs"                 # Subscribers section
    SALES = "sales"               # Card sales section
    ROUTERS = "routers"           # Routers section


class User(TenantBase):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("tenant_id", "username", name="uq_users_tenant_username"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    username = Column(String(100), nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(Enum(UserRole), default=UserRole.SUBS, nullable=False)
    permissions = Column(JSON, default=list, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"
