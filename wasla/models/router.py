"""
Wasla - Router model
Access points of the network. Status is set by hand, there is no telemetry.
"""
from sqlalchemy import Column, Integer, String, Text, Enum
from wasla.models.base import TenantBase
import enum


class RouterStatus(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class Router(TenantBase):
    __tablename__ = "routers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    model = Column(String(100), nullable=True)                   # e.g. "Mikrotik", "TP-Link"
    ip = Column(String(50), nullable=True)
    location = Column(String(300), nullable=True)
    status = Column(Enum(RouterStatus), default=RouterStatus.ONLINE, nullable=False)
    total_ports = Column(Integer, default=0, nullable=False)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Router {self.name} ({self.status.value})>"
