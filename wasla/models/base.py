"""
Wasla - Multi-tenant base model
Subscribers, packages, routers, sales, payments, staff and the activity log
all hang off a network (tenant); removing the network removes its rows.
"""
from sqlalchemy import Column, Integer, DateTime, func, ForeignKey
from sqlalchemy.orm import declared_attr
from wasla.database import Base


class TimestampMixin:
    """created_at feeds the newest-first lists; updated_at tracks the last edit."""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class TenantBase(Base, TimestampMixin):
    """
    Base class for every table scoped to one network.
    Routers filter each query by tenant_id; a row of another network reads as 404.
    """
    __abstract__ = True

    @declared_attr
    def tenant_id(cls):
        return Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
