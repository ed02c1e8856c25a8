"""
Wasla - Packages router
CRUD of the internet packages a network sells. Deleting only deactivates.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from wasla.dependencies import get_db, require_role, SUBSCRIBER_ROLES
from wasla.models.package import Package
from wasla.models.user import User
from wasla.schemas.common import MessageResponse, update_values
from wasla.schemas.package import PackageCreate, PackageUpdate, PackageResponse
from wasla.services.activity_service import log_activity

router = APIRouter(prefix="/packages", tags=["Packages"])


async def _get_package(db: AsyncSession, package_id: int, tenant_id: int) -> Package:
    package = await db.get(Package, package_id)
    if not package or package.tenant_id != tenant_id:
        raise HTTPException(404, "الباقة غير موجودة.")
    return package


@router.get("/", response_model=List[PackageResponse])
async def list_packages(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    """Active packages, slowest first."""
    q = select(Package).where(Package.tenant_id == user.tenant_id)
    if not include_inactive:
        q = q.where(Package.is_active == True)
    result = await db.execute(q.order_by(Package.speed, Package.id))
    return result.scalars().all()


@router.post("/", response_model=PackageResponse, status_code=201)
async def create_package(
    data: PackageCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    package = Package(tenant_id=user.tenant_id, **data.model_dump())
    db.add(package)
    await db.flush()

    await log_activity(db, user, "add", "package", package.id, package.name)
    await db.commit()
    await db.refresh(package)
    return package


@router.patch("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: int,
    data: PackageUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    package = await _get_package(db, package_id, user.tenant_id)

    for k, v in update_values(data, "description").items():
        setattr(package, k, v)

    await log_activity(db, user, "edit", "package", package.id, package.name,
                       data.model_dump(mode="json", exclude_unset=True))
    await db.commit()
    await db.refresh(package)
    return package


@router.delete("/{package_id}", response_model=MessageResponse)
async def delete_package(
    package_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    package = await _get_package(db, package_id, user.tenant_id)
    package.is_active = False

    await log_activity(db, user, "delete", "package", package.id, package.name)
    await db.commit()
    return MessageResponse(message="تم حذف الباقة")
