"""
Wasla - Dependencies (FastAPI Depends)
Injected into endpoints to get the current user and tenant and to check roles.
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from wasla.database import get_db
from wasla.middleware.auth import decode_token
from wasla.models.tenant import Tenant
from wasla.models.user import User, UserRole

security = HTTPBearer()

# Section roles. Owners and admins reach every section of their network.
MANAGERS = (UserRole.SUPER_ADMIN, UserRole.OWNER, UserRole.ADMIN)
SUBSCRIBER_ROLES = MANAGERS + (UserRole.SUBS,)
ROUTER_ROLES = MANAGERS + (UserRole.ROUTERS,)
SALES_ROLES = MANAGERS + (UserRole.SALES,)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Extracts and validates the JWT from the Authorization header.
    Checks that the user belongs to the tenant of the request.
    """
    payload = decode_token(credentials.credentials)
    if not payload or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="الجلسة غير صالحة أو منتهية.",
        )

    user_id = int(payload["sub"])
    token_tenant_id = payload["tenant_id"]

    request_tenant_id = getattr(request.state, "tenant_id", None)
    if request_tenant_id and token_tenant_id != request_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="ليس لديك صلاحية على هذه الشبكة.",
        )

    result = await db.execute(
        select(User).where(User.id == user_id, User.tenant_id == token_tenant_id, User.is_active == True)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="المستخدم غير موجود أو معطّل.",
        )

    # A deactivated network locks out everyone but the platform operator
    if user.role != UserRole.SUPER_ADMIN:
        tenant = await db.get(Tenant, user.tenant_id)
        if not tenant or not tenant.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="هذا الحساب معطّل. تواصل مع الدعم.",
            )

    return user


def require_role(*roles: UserRole):
    """
    Dependency factory that checks the user holds one of the allowed roles.

    Usage:
        @router.post("/admin-only", dependencies=[Depends(require_role(UserRole.ADMIN))])
    """
    async def role_checker(current_user: User = Depends(get_current_user)):
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"الصلاحية المطلوبة: {', '.join(r.value for r in roles)}",
            )
        return current_user
    return role_checker
