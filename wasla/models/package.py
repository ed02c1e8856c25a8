"""
Wasla - Package model
Internet packages a network sells (speed, price, duration).
"""
from sqlalchemy import Column, Integer, String, Boolean, Text, Numeric
from wasla.models.base import TenantBase


class Package(TenantBase):
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    speed = Column(Integer, nullable=False)                      # Mbps
    price = Column(Numeric(10, 2), nullable=False, default=0)
    duration_days = Column(Integer, nullable=False, default=30)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Package {self.name} {self.speed}M ${self.price}>"
