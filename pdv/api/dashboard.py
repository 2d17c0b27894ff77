"""
Dashboard API endpoints
"""

from fastapi import APIRouter, Depends

from pdv.core.database import get_store
from pdv.core.dependencies import CurrentUser, require_permission
from pdv.core.permissions import Permission
from pdv.core.store import JsonStore
from pdv.schemas.sale import DashboardOverview
from pdv.services import reporting_service

router = APIRouter()


@router.get("/overview", response_model=DashboardOverview)
def get_overview(
    current_user: CurrentUser = Depends(require_permission(Permission.REPORTS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """Today's totals, low stock count, payment mix and latest sales"""
    return reporting_service.dashboard_overview(store, current_user.tenant_id)
