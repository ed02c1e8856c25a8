"""
Wasla - Routers router
CRUD of the network's routers. Status is set by hand; the subscriber count
comes from the subscribers assigned to each router.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from typing import List

from wasla.dependencies import get_db, require_role, ROUTER_ROLES
from wasla.models.router import Router, RouterStatus
from wasla.models.subscriber import Subscriber
from wasla.models.user import User
from wasla.schemas.common import update_values
from wasla.schemas.network import RouterCreate, RouterUpdate, RouterResponse
from wasla.services.activity_service import log_activity

router = APIRouter(prefix="/routers", tags=["Routers"])


async def _get_router(db: AsyncSession, router_id: int, tenant_id: int) -> Router:
    found = await db.get(Router, router_id)
    if not found or found.tenant_id != tenant_id:
        raise HTTPException(404, "الراوتر غير موجود.")
    return found


async def _with_count(db: AsyncSession, r: Router) -> RouterResponse:
    count = await db.scalar(
        select(func.count(Subscriber.id)).where(Subscriber.router_id == r.id)
    ) or 0
    return RouterResponse.model_validate(r).model_copy(update={"subscriber_count": count})


@router.get("/", response_model=List[RouterResponse])
async def list_routers(
    status: RouterStatus | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*ROUTER_ROLES))
):
    q = select(Router).where(Router.tenant_id == user.tenant_id)
    if status:
        q = q.where(Router.status == status)
    result = await db.execute(q.order_by(Router.created_at.desc(), Router.id.desc()))
    return [await _with_count(db, r) for r in result.scalars().all()]


@router.get("/{router_id}", response_model=RouterResponse)
async def get_router(
    router_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*ROUTER_ROLES))
):
    return await _with_count(db, await _get_router(db, router_id, user.tenant_id))


@router.post("/", response_model=RouterResponse, status_code=201)
async def create_router(
    data: RouterCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*ROUTER_ROLES))
):
    r = Router(tenant_id=user.tenant_id, **data.model_dump())
    db.add(r)
    await db.flush()

    await log_activity(db, user, "add", "router", r.id, r.name)
    await db.commit()
    await db.refresh(r)
    return await _with_count(db, r)


@router.put("/{router_id}", response_model=RouterResponse)
async def update_router(
    router_id: int,
    data: RouterUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*ROUTER_ROLES))
):
    r = await _get_router(db, router_id, user.tenant_id)

    for k, v in update_values(data, "model", "ip", "location", "notes").items():
        setattr(r, k, v)

    await log_activity(db, user, "edit", "router", r.id, r.name,
                       data.model_dump(mode="json", exclude_unset=True))
    await db.commit()
    await db.refresh(r)
    return await _with_count(db, r)


@router.delete("/{router_id}", status_code=204)
async def delete_router(
    router_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*ROUTER_ROLES))
):
    """Deletes a router. Its subscribers stay, without a router."""
    r = await _get_router(db, router_id, user.tenant_id)
    name = r.name

    await db.execute(
        update(Subscriber)
        .where(Subscriber.router_id == r.id)
        .values(router_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.delete(r)
    await log_activity(db, user, "delete", "router", router_id, name)
    await db.commit()
