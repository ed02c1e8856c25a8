"""
Wasla - Tenant Resolver Middleware
Resolves the tenant from the subdomain or the X-Tenant-Slug header.

alnoor.wasla.app → tenant "alnoor"
alnoor.localhost → tenant "alnoor"
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy import select
from wasla.database import AsyncSessionLocal
from wasla.models.tenant import Tenant


# Paths that never need a tenant (signup, health, docs)
PUBLIC_PATHS = [
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/api/v1/auth/register-tenant",
]

TENANT_HEADER = "x-tenant-slug"


class TenantResolverMiddleware(BaseHTTPMiddleware):
    """
    Resolves the tenant of the request.
    Sets tenant_id and tenant_slug on request.state (None when not resolved).
    """

    def __init__(self, app, base_domain: str = "wasla.app"):
        super().__init__(app)
        self.base_domain = base_domain

    async def dispatch(self, request: Request, call_next):
        request.state.tenant_id = None
        request.state.tenant_slug = None

        if request.url.path == "/" or any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        host = request.headers.get("host", "").split(":")[0]
        slug = request.headers.get(TENANT_HEADER) or self._extract_slug(host)

        # Single-site installs run without a slug; the token decides the tenant
        if not slug:
            return await call_next(request)

        async with AsyncSessionLocal() as session:
            result = await session.execute(select(Tenant).where(Tenant.slug == slug))
            tenant = result.scalar_one_or_none()

        if not tenant:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": f"الشبكة '{slug}' غير موجودة."},
            )

        if not tenant.is_active:
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"detail": "هذا الحساب معطّل. تواصل مع الدعم."},
            )

        request.state.tenant_id = tenant.id
        request.state.tenant_slug = tenant.slug

        return await call_next(request)

    def _extract_slug(self, host: str) -> str | None:
        """
        Extracts the slug from the subdomain.
        alnoor.wasla.app → "alnoor"
        localhost / wasla.app → None
        """
        if host in ("localhost", "127.0.0.1", self.base_domain):
            return None

        if host.endswith(".localhost"):
            return host[: -len(".localhost")]

        if host.endswith(f".{self.base_domain}"):
            return host[: -len(f".{self.base_domain}")]

        return None
