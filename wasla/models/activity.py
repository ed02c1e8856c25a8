"""
Wasla - Activity log model
Append-only audit trail of CRUD actions, shown in the UI.
Capped per tenant by services/activity_service.py.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from wasla.models.base import TenantBase


class ActivityLog(TenantBase):
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(30), nullable=False)                  # add, edit, delete, payment...
    entity_type = Column(String(30), nullable=True)              # subscriber, router, sale...
    entity_id = Column(Integer, nullable=True)
    entity_name = Column(String(200), nullable=True)
    user_id = Column(Integer, nullable=True)
    user_name = Column(String(200), nullable=True)
    details = Column(JSON, nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<ActivityLog {self.action} {self.entity_type}:{self.entity_id}>"
