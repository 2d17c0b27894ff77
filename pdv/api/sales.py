"""
Sales API endpoints
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
import structlog

from pdv.core.database import get_store
from pdv.core.dependencies import CurrentUser, require_permission
from pdv.core.permissions import Permission
from pdv.core.store import JsonStore
from pdv.models.sale import Sale
from pdv.schemas.sale import SaleCreate, SaleRead, SalesStats
from pdv.services import reporting_service, sales_service

logger = structlog.get_logger(__name__)
router = APIRouter()


def _to_read(sale: Sale) -> SaleRead:
    return SaleRead.model_validate(sale.to_document())


@router.post("", response_model=SaleRead, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.SALES_CREATE)),
    store: JsonStore = Depends(get_store)
):
    """Record a sale and decrement stock"""
    items = None
    if sale_data.items is not None:
        items = [item.model_dump() for item in sale_data.items]

    sale = sales_service.record_sale(
        store,
        tenant_id=current_user.tenant_id,
        user_id=current_user.id,
        items=items,
        payment_method=sale_data.payment_method,
        cash_received=sale_data.cash_received,
        cash_change=sale_data.cash_change,
        notes=sale_data.notes,
    )
    return _to_read(sale)


@router.get("/today", response_model=List[SaleRead])
def list_todays_sales(
    current_user: CurrentUser = Depends(require_permission(Permission.REPORTS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """Completed sales created today"""
    return [_to_read(s) for s in reporting_service.todays_sales(store, current_user.tenant_id)]


@router.get("/stats", response_model=SalesStats)
def get_sales_stats(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    current_user: CurrentUser = Depends(require_permission(Permission.REPORTS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """Sales totals and top products over an inclusive date range"""
    return reporting_service.sales_stats(store, current_user.tenant_id, start_date, end_date)
