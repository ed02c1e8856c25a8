"""
Wasla - Subscriber model
Internet subscribers of each network.
The status shown in the UI is derived (see services/subscriber_status.py), never stored.
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Enum, Text, Numeric,
    Date, ForeignKey
)
from wasla.models.base import TenantBase
import enum


class SubscriptionType(str, enum.Enum):
    MONTHLY = "monthly"
    USER = "user"


class Subscriber(TenantBase):
    __tablename__ = "subscribers"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # --- Contact ---
    name = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=True)
    address = Column(String(500), nullable=True)

    # --- Service ---
    subscription_type = Column(Enum(SubscriptionType), default=SubscriptionType.MONTHLY, nullable=False)
    speed = Column(Integer, nullable=True)                       # Mbps
    max_devices = Column(Integer, default=1, nullable=False)
    package_id = Column(Integer, ForeignKey("packages.id", ondelete="SET NULL"), nullable=True)
    package_name = Column(String(200), nullable=True)
    package_price = Column(Numeric(10, 2), default=0, nullable=False)
    router_id = Column(Integer, ForeignKey("routers.id", ondelete="SET NULL"), nullable=True, index=True)

    # --- Period ---
    start_date = Column(Date, nullable=False)
    expire_date = Column(Date, nullable=False, index=True)

    # --- Account ---
    balance = Column(Numeric(10, 2), default=0, nullable=False)  # > 0 means the subscriber owes money
    is_stopped = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Subscriber {self.name} (expires {self.expire_date})>"
