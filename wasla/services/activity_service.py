"""
Wasla - Activity log service
Appends entries to the per-tenant audit trail and keeps it capped.
"""
import logging
from typing import Any, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.config import get_settings
from wasla.models.activity import ActivityLog
from wasla.models.user import User

logger = logging.getLogger("activity_service")
settings = get_settings()


async def log_activity(
    db: AsyncSession,
    user: User,
    action: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    entity_name: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> ActivityLog:
    """Adds one entry in the current transaction and drops the oldest past the cap."""
    entry = ActivityLog(
        tenant_id=user.tenant_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        user_id=user.id,
        user_name=user.name,
        details=details,
    )
    db.add(entry)
    await db.flush()

    await trim_activity_log(db, user.tenant_id)
    logger.info(f"[{user.tenant_id}] {user.username} {action} {entity_type or ''} {entity_name or entity_id or ''}")
    return entry


async def trim_activity_log(db: AsyncSession, tenant_id: int, keep: int | None = None) -> None:
    keep = keep or settings.ACTIVITY_LOG_MAX_ENTRIES
    kept_ids = (
        select(ActivityLog.id)
        .where(ActivityLog.tenant_id == tenant_id)
        .order_by(ActivityLog.id.desc())
        .limit(keep)
    )
    await db.execute(
        delete(ActivityLog)
        .where(ActivityLog.tenant_id == tenant_id, ActivityLog.id.not_in(kept_ids))
        .execution_options(synchronize_session=False)
    )
