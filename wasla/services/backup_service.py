"""
Wasla - Tenant backup
Dumps every row of a tenant as one JSON document, in the same shape the
local JSON-file server kept on disk. Password hashes are never exported.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.models.activity import ActivityLog
from wasla.models.package import Package
from wasla.models.payment import Payment
from wasla.models.router import Router
from wasla.models.sale import Sale
from wasla.models.subscriber import Subscriber
from wasla.models.tenant import Tenant
from wasla.models.user import User
from wasla.schemas.activity import ActivityLogResponse
from wasla.schemas.auth import TenantResponse, UserResponse
from wasla.schemas.network import RouterResponse
from wasla.schemas.package import PackageResponse
from wasla.schemas.payment import PaymentResponse
from wasla.schemas.sale import SaleResponse
from wasla.schemas.subscriber import SubscriberResponse

logger = logging.getLogger("backup_service")

# collection name → (model, schema, order column)
COLLECTIONS = {
    "subscribers": (Subscriber, SubscriberResponse, Subscriber.id),
    "routers": (Router, RouterResponse, Router.id),
    "packages": (Package, PackageResponse, Package.id),
    "sales": (Sale, SaleResponse, Sale.id),
    "payments": (Payment, PaymentResponse, Payment.id),
    "staff": (User, UserResponse, User.id),
    "activity_log": (ActivityLog, ActivityLogResponse, ActivityLog.id),
}


async def export_tenant(db: AsyncSession, tenant: Tenant) -> dict[str, Any]:
    document: dict[str, Any] = {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "tenant": TenantResponse.model_validate(tenant).model_dump(mode="json"),
    }
    for name, (model, schema, order) in COLLECTIONS.items():
        result = await db.execute(select(model).where(model.tenant_id == tenant.id).order_by(order))
        document[name] = [schema.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]

    logger.info(
        f"Backup of {tenant.slug}: "
        + ", ".join(f"{len(document[name])} {name}" for name in COLLECTIONS)
    )
    return document
