"""
Wasla - Staff router
Staff accounts of the network. Password hashes never leave the server.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List

from wasla.dependencies import get_db, require_role, MANAGERS
from wasla.middleware.auth import hash_password
from wasla.models.user import User, UserRole
from wasla.schemas.auth import UserResponse
from wasla.schemas.common import update_values
from wasla.schemas.staff import StaffCreate, StaffUpdate
from wasla.services.activity_service import log_activity

logger = logging.getLogger("staff_router")

router = APIRouter(prefix="/staff", tags=["Staff"])

OWNER_ROLES = (UserRole.OWNER, UserRole.SUPER_ADMIN)


async def _get_member(db: AsyncSession, user_id: int, tenant_id: int) -> User:
    member = await db.get(User, user_id)
    if not member or member.tenant_id != tenant_id:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "الموظف غير موجود.")
    return member


async def _check_username(db: AsyncSession, tenant_id: int, username: str, exclude_id: int | None = None):
    q = select(User.id).where(User.tenant_id == tenant_id, User.username == username)
    if exclude_id:
        q = q.where(User.id != exclude_id)
    if await db.scalar(q):
        raise HTTPException(status.HTTP_409_CONFLICT, f"اسم المستخدم '{username}' مستخدم مسبقاً.")


def _check_grant(actor: User, role: UserRole):
    """Only owners hand out owner-level roles; nobody hands out super_admin."""
    if role == UserRole.SUPER_ADMIN or (role == UserRole.OWNER and actor.role not in OWNER_ROLES):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "لا يمكنك منح هذه الصلاحية.")


async def _owners_left(db: AsyncSession, tenant_id: int, without: int) -> int:
    return await db.scalar(
        select(func.count(User.id)).where(
            User.tenant_id == tenant_id,
            User.role.in_(OWNER_ROLES),
            User.is_active == True,
            User.id != without,
        )
    ) or 0


@router.get("/", response_model=List[UserResponse])
async def list_staff(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    result = await db.execute(
        select(User).where(User.tenant_id == user.tenant_id).order_by(User.created_at.desc(), User.id.desc())
    )
    return result.scalars().all()


@router.post("/", response_model=UserResponse, status_code=201)
async def create_staff(
    data: StaffCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    _check_grant(user, data.role)
    await _check_username(db, user.tenant_id, data.username)

    member = User(
        tenant_id=user.tenant_id,
        name=data.name,
        username=data.username,
        hashed_password=hash_password(data.password),
        phone=data.phone,
        role=data.role,
        permissions=data.permissions,
    )
    db.add(member)
    await db.flush()

    await log_activity(db, user, "add", "staff", member.id, member.name, {"role": member.role.value})
    await db.commit()
    await db.refresh(member)
    return member


@router.put("/{user_id}", response_model=UserResponse)
async def update_staff(
    user_id: int,
    data: StaffUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    member = await _get_member(db, user_id, user.tenant_id)
    updates = update_values(data, "phone", "password")

    if member.role in OWNER_ROLES and user.role not in OWNER_ROLES:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "لا يمكنك تعديل حساب المالك.")

    if "role" in updates and updates["role"] != member.role:
        _check_grant(user, updates["role"])
        if member.role in OWNER_ROLES and not await _owners_left(db, user.tenant_id, member.id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "لا يمكن إزالة آخر مالك للشبكة.")

    if updates.get("is_active") is False and member.id == user.id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "لا يمكنك تعطيل حسابك.")

    if "username" in updates:
        await _check_username(db, user.tenant_id, updates["username"], exclude_id=member.id)

    password = updates.pop("password", None)
    if password:
        member.hashed_password = hash_password(password)

    for k, v in updates.items():
        setattr(member, k, v)

    changed = sorted(data.model_dump(exclude_unset=True).keys())
    await log_activity(db, user, "edit", "staff", member.id, member.name, {"fields": changed})
    await db.commit()
    await db.refresh(member)
    return member


@router.delete("/{user_id}", status_code=204)
async def delete_staff(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    member = await _get_member(db, user_id, user.tenant_id)

    if member.id == user.id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "لا يمكنك حذف حسابك.")
    if member.role in OWNER_ROLES:
        if user.role not in OWNER_ROLES:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "لا يمكنك حذف حساب المالك.")
        if not await _owners_left(db, user.tenant_id, member.id):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "لا يمكن حذف آخر مالك للشبكة.")

    name = member.name
    await db.delete(member)
    await log_activity(db, user, "delete", "staff", user_id, name)
    await db.commit()
    logger.info(f"Staff {user_id} deleted by {user.username}")
