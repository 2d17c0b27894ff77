"""
Store settings and backup API endpoints
"""

import json
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response
import structlog

from pdv.core.database import get_store
from pdv.core.dependencies import CurrentUser, require_permission
from pdv.core.permissions import Permission
from pdv.core.store import JsonStore
from pdv.core.time_utils import utcnow
from pdv.schemas.user import SettingsResponse, TenantResponse, TenantUpdate
from pdv.services import settings_service

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/settings", response_model=SettingsResponse)
def read_settings(
    current_user: CurrentUser = Depends(require_permission(Permission.SETTINGS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """Tenant profile and preferences"""
    result = settings_service.get_tenant_settings(store, current_user.tenant_id)
    return SettingsResponse(
        tenant=TenantResponse.model_validate(result["tenant"].to_document()),
        preferences=result["preferences"],
    )


@router.put("/settings/tenant", response_model=TenantResponse)
def update_tenant(
    tenant_data: TenantUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.SETTINGS_EDIT)),
    store: JsonStore = Depends(get_store)
):
    """Update the store profile"""
    tenant = settings_service.update_tenant(
        store,
        current_user.tenant_id,
        tenant_data.model_dump(exclude_unset=True),
    )
    return TenantResponse.model_validate(tenant.to_document())


@router.put("/settings", response_model=Dict[str, Any])
def update_preferences(
    preferences: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_permission(Permission.SETTINGS_EDIT)),
    store: JsonStore = Depends(get_store)
):
    """Merge the sent keys into the store preferences"""
    return settings_service.update_preferences(store, current_user.tenant_id, preferences)


@router.get("/backup")
def download_backup(
    current_user: CurrentUser = Depends(require_permission(Permission.BACKUP_EXPORT)),
    store: JsonStore = Depends(get_store)
):
    """Download the store's data as a JSON file"""
    backup = settings_service.export_backup(store, current_user.tenant_id)
    filename = f"backup-{current_user.tenant_id}-{utcnow():%Y%m%d%H%M%S}.json"
    return Response(
        content=json.dumps(backup, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
