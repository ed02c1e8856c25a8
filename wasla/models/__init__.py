"""
Wasla - Models
Imports every model so SQLAlchemy registers them.
"""
# Base
from wasla.models.base import TenantBase, TimestampMixin

# Core
from wasla.models.tenant import Tenant, SubscriptionStatus
from wasla.models.user import User, UserRole

# Network
from wasla.models.package import Package
from wasla.models.router import Router, RouterStatus
from wasla.models.subscriber import Subscriber, SubscriptionType

# Ledgers
from wasla.models.sale import Sale, SaleType
from wasla.models.payment import Payment, PaymentType

# Audit
from wasla.models.activity import ActivityLog

__all__ = [
    # Base
    "TenantBase", "TimestampMixin",
    # Core
    "Tenant", "SubscriptionStatus",
    "User", "UserRole",
    # Network
    "Package",
    "Router", "RouterStatus",
    "Subscriber", "SubscriptionType",
    # Ledgers
    "Sale", "SaleType",
    "Payment", "PaymentType",
    # Audit
    "ActivityLog",
]
