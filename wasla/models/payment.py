"""
Wasla - Payment model
Flat ledger of subscriber payments.
"""
from sqlalchemy import Column, Integer, String, Enum, Text, Numeric, Date, ForeignKey
from wasla.models.base import TenantBase
import enum


class PaymentType(str, enum.Enum):
    SUBSCRIPTION = "subscription"
    EXTENSION = "extension"
    OTHER = "other"


class Payment(TenantBase):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subscriber_id = Column(Integer, ForeignKey("subscribers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, nullable=False, index=True)
    payment_type = Column(Enum(PaymentType), default=PaymentType.SUBSCRIPTION, nullable=False)
    payment_method = Column(String(50), default="cash", nullable=False)
    notes = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    def __repr__(self):
        return f"<Payment {self.amount} sub={self.subscriber_id}>"
