"""
Wasla - Backup router
JSON export of everything the caller's network holds.
"""
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.dependencies import get_db, require_role, MANAGERS
from wasla.models.user import User
from wasla.services.backup_service import export_tenant
from wasla.services.tenant_service import get_tenant_or_404

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("/export")
async def export_backup(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    tenant = await get_tenant_or_404(db, user.tenant_id)
    document = await export_tenant(db, tenant)
    filename = f"wasla-{tenant.slug}-{date.today().isoformat()}.json"
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
