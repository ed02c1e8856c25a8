"""
Wasla - Sales router
Ledger of prepaid card sales (wholesale / retail).
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from wasla.dependencies import get_db, require_role, SALES_ROLES
from wasla.models.sale import Sale, SaleType
from wasla.models.user import User
from wasla.schemas.common import update_values
from wasla.schemas.sale import SaleCreate, SaleUpdate, SaleResponse
from wasla.services.activity_service import log_activity
from wasla.services.stats_service import month_bounds

router = APIRouter(prefix="/sales", tags=["Sales"])


async def _get_sale(db: AsyncSession, sale_id: int, tenant_id: int) -> Sale:
    sale = await db.get(Sale, sale_id)
    if not sale or sale.tenant_id != tenant_id:
        raise HTTPException(404, "عملية البيع غير موجودة.")
    return sale


@router.get("/", response_model=List[SaleResponse])
async def list_sales(
    sale_type: Optional[SaleType] = None,
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SALES_ROLES))
):
    """Sales, newest first. Optional type and month filters."""
    q = select(Sale).where(Sale.tenant_id == user.tenant_id)
    if sale_type:
        q = q.where(Sale.sale_type == sale_type)
    if month:
        try:
            start, end = month_bounds(date.fromisoformat(f"{month}-01"))
        except ValueError:
            raise HTTPException(422, "صيغة الشهر غير صحيحة.")
        q = q.where(Sale.sale_date >= start, Sale.sale_date < end)
    result = await db.execute(q.order_by(Sale.sale_date.desc(), Sale.id.desc()))
    return result.scalars().all()


@router.post("/", response_model=SaleResponse, status_code=201)
async def create_sale(
    data: SaleCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SALES_ROLES))
):
    values = data.model_dump()
    values["sale_date"] = values["sale_date"] or date.today()

    sale = Sale(tenant_id=user.tenant_id, **values)
    db.add(sale)
    await db.flush()

    await log_activity(db, user, "add", "sale", sale.id, f"{sale.sale_type.value} x{sale.count}",
                       {"count": sale.count, "price": float(sale.price)})
    await db.commit()
    await db.refresh(sale)
    return sale


@router.put("/{sale_id}", response_model=SaleResponse)
async def update_sale(
    sale_id: int,
    data: SaleUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SALES_ROLES))
):
    sale = await _get_sale(db, sale_id, user.tenant_id)

    for k, v in update_values(data, "notes").items():
        setattr(sale, k, v)

    await log_activity(db, user, "edit", "sale", sale.id, f"{sale.sale_type.value} x{sale.count}",
                       data.model_dump(mode="json", exclude_unset=True))
    await db.commit()
    await db.refresh(sale)
    return sale


@router.delete("/{sale_id}", status_code=204)
async def delete_sale(
    sale_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SALES_ROLES))
):
    sale = await _get_sale(db, sale_id, user.tenant_id)
    label = f"{sale.sale_type.value} x{sale.count}"

    await db.delete(sale)
    await log_activity(db, user, "delete", "sale", sale_id, label)
    await db.commit()
