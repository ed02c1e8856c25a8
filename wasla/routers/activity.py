"""
Wasla - Activity log router
Newest entries of the network's audit trail, optionally grouped by day.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from wasla.config import get_settings
from wasla.dependencies import get_db, require_role, MANAGERS
from wasla.models.activity import ActivityLog
from wasla.models.user import User
from wasla.schemas.activity import ActivityLogResponse, ActivityLogGroup

settings = get_settings()

router = APIRouter(prefix="/activity-log", tags=["Activity log"])


def group_by_date(entries: List[ActivityLogResponse]) -> List[ActivityLogGroup]:
    """Groups entries (already newest first) by calendar day."""
    groups: dict[str, list] = {}
    for entry in entries:
        groups.setdefault(entry.timestamp.date().isoformat(), []).append(entry)
    return [ActivityLogGroup(date=day, entries=items) for day, items in groups.items()]


async def _latest(db: AsyncSession, tenant_id: int, entity_type: Optional[str], limit: Optional[int]):
    q = select(ActivityLog).where(ActivityLog.tenant_id == tenant_id)
    if entity_type:
        q = q.where(ActivityLog.entity_type == entity_type)
    q = q.order_by(ActivityLog.id.desc()).limit(limit or settings.ACTIVITY_LOG_PAGE_SIZE)
    result = await db.execute(q)
    return [ActivityLogResponse.model_validate(e) for e in result.scalars().all()]


@router.get("/", response_model=List[ActivityLogResponse])
async def list_activity(
    entity_type: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    return await _latest(db, user.tenant_id, entity_type, limit)


@router.get("/grouped", response_model=List[ActivityLogGroup])
async def list_activity_grouped(
    entity_type: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    return group_by_date(await _latest(db, user.tenant_id, entity_type, limit))
