"""
Wasla - Schemas: Dashboard and reports
"""
from pydantic import BaseModel
from typing import List, Dict


class DashboardStats(BaseModel):
    total_subscribers: int
    active_subscribers: int
    expiring_subscribers: int
    expired_subscribers: int
    stopped_subscribers: int
    indebted_subscribers: int
    total_routers: int
    online_routers: int
    total_sales: int          # Cards sold
    total_revenue: float
    monthly_revenue: float


class MonthPoint(BaseModel):
    month: str                # YYYY-MM
    income: float
    subscriptions: int
    extensions: int


class MonthlyReport(BaseModel):
    month: str
    total_income: float
    payments_income: float
    sales_income: float
    new_subscribers: int
    expired_this_month: int
    last_months: List[MonthPoint]
    speed_distribution: Dict[str, int]
    stats: DashboardStats
