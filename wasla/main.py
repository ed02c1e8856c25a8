"""
Wasla - FastAPI entry point
ISP subscriber management, single-site (SQLite) or multi-tenant (Postgres).
"""
import logging
import socket

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from wasla.config import get_settings
from wasla.database import engine, Base, AsyncSessionLocal
from wasla.middleware.tenant_resolver import TenantResolverMiddleware
from wasla.services.tenant_service import seed_default_tenant

# Routers
from wasla.routers.auth import router as auth_router
from wasla.routers.subscribers import router as subscribers_router
from wasla.routers.packages import router as packages_router
from wasla.routers.network import router as routers_router
from wasla.routers.sales import router as sales_router
from wasla.routers.payments import router as payments_router
from wasla.routers.staff import router as staff_router
from wasla.routers.activity import router as activity_router
from wasla.routers.dashboard import router as dashboard_router
from wasla.routers.tenants import router as tenants_router
from wasla.routers.backup import router as backup_router

# Register the models
from wasla.models import *  # noqa

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("wasla")


def local_ips() -> list[str]:
    """IPv4 addresses other devices on the LAN can reach this server on."""
    ips = set()
    try:
        for info in socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET):
            ips.add(info[4][0])
    except socket.gaierror:
        pass
    return sorted(ip for ip in ips if not ip.startswith("127."))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Creates the tables and the default admin on start."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        await seed_default_tenant(session)

    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started")
    logger.info(f"  local:   http://localhost:{settings.PORT}")
    for ip in local_ips():
        logger.info(f"  network: http://{ip}:{settings.PORT}")
    yield
    await engine.dispose()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="وصلة - إدارة مشتركي الإنترنت",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TenantResolverMiddleware, base_domain=settings.BASE_DOMAIN)


# Routers
app.include_router(auth_router)
app.include_router(subscribers_router, prefix="/api/v1")
app.include_router(packages_router, prefix="/api/v1")
app.include_router(routers_router, prefix="/api/v1")
app.include_router(sales_router, prefix="/api/v1")
app.include_router(payments_router, prefix="/api/v1")
app.include_router(staff_router, prefix="/api/v1")
app.include_router(activity_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(tenants_router, prefix="/api/v1")
app.include_router(backup_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    """Console entry point: serves on every interface so phones on the LAN can connect."""
    import uvicorn
    uvicorn.run("wasla.main:app", host="0.0.0.0", port=settings.PORT)
