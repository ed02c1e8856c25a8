"""
Wasla - Sale model
Flat ledger of prepaid card sales (wholesale to shops or retail).
"""
from sqlalchemy import Column, Integer, Enum, Text, Numeric, Date
from wasla.models.base import TenantBase
import enum


class SaleType(str, enum.Enum):
    WHOLESALE = "wholesale"
    RETAIL = "retail"


class Sale(TenantBase):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_type = Column(Enum(SaleType), default=SaleType.RETAIL, nullable=False)
    count = Column(Integer, default=1, nullable=False)           # Number of cards
    price = Column(Numeric(10, 2), default=0, nullable=False)    # Total price of the batch
    sale_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Sale {self.sale_type.value} x{self.count} ${self.price}>"
