"""
Wasla - Auth router
Login, refresh token, password change and network signup.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wasla.database import get_db
from wasla.dependencies import get_current_user
from wasla.models.tenant import Tenant
from wasla.models.user import User, UserRole
from wasla.middleware.auth import (
    verify_password,
    verify_and_update_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from wasla.schemas import (
    LoginRequest,
    TokenResponse,
    RefreshRequest,
    ChangePasswordRequest,
    UserResponse,
    TenantCreate,
    TenantResponse,
    MessageResponse,
)
from wasla.services.activity_service import log_activity
from wasla.services.tenant_service import register_tenant as create_tenant

logger = logging.getLogger("auth_router")

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])

BAD_CREDENTIALS = "اسم المستخدم أو كلمة المرور غير صحيحة"


def _tokens_for(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.tenant_id, user.role.value),
        refresh_token=create_refresh_token(user.id, user.tenant_id),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, request: Request, db: AsyncSession = Depends(get_db)):
    """
    Username + password login. Returns JWTs.
    The network comes from the subdomain / X-Tenant-Slug header; without one
    the username must be unique across networks.
    """
    query = select(User).where(User.username == data.username, User.is_active == True)
    tenant_id = getattr(request.state, "tenant_id", None)
    if tenant_id:
        query = query.where(User.tenant_id == tenant_id)

    result = await db.execute(query)
    candidates = result.scalars().all()
    user = candidates[0] if len(candidates) == 1 else None

    verified, new_hash = (False, None)
    if user:
        verified, new_hash = verify_and_update_password(data.password, user.hashed_password)

    if not verified:
        logger.warning(f"Rejected login for '{data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=BAD_CREDENTIALS,
        )

    tenant = await db.get(Tenant, user.tenant_id)
    if user.role != UserRole.SUPER_ADMIN and (not tenant or not tenant.is_active):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="هذا الحساب معطّل. تواصل مع الدعم.",
        )

    # Legacy sha256 hashes are upgraded to bcrypt on the way in
    if new_hash:
        user.hashed_password = new_hash

    await log_activity(db, user, "login", "staff", user.id, user.name)
    await db.commit()
    await db.refresh(user)

    logger.info(f"Login: {user.username} (tenant {user.tenant_id})")
    return _tokens_for(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(data: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Issues a new access token from a valid refresh token."""
    payload = decode_token(data.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="رمز التحديث غير صالح أو منتهي.",
        )

    result = await db.execute(
        select(User).where(
            User.id == int(payload["sub"]),
            User.tenant_id == payload["tenant_id"],
            User.is_active == True,
        )
    )
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="المستخدم غير موجود.")

    return _tokens_for(user)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Changes the caller's password. The current password must match."""
    if not verify_password(data.old_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="كلمة المرور الحالية غير صحيحة",
        )

    current_user.hashed_password = hash_password(data.new_password)
    await log_activity(db, current_user, "edit", "staff", current_user.id, current_user.name,
                       {"field": "password"})
    await db.commit()
    return MessageResponse(message="تم تغيير كلمة المرور")


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client drops them."""
    logger.info(f"Logout: {current_user.username}")
    return MessageResponse(message="تم تسجيل الخروج")


@router.post("/register-tenant", response_model=TenantResponse, status_code=201)
async def register_tenant(data: TenantCreate, db: AsyncSession = Depends(get_db)):
    """
    Registers a new network (tenant) with its owner account.
    This is the onboarding of new ISPs.
    """
    tenant = await create_tenant(db, data)
    return TenantResponse.model_validate(tenant)
