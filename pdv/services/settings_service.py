"""
Tenant profile, per-tenant preferences and backup export
"""

from typing import Any

import structlog

from pdv.core.errors import NotFoundError
from pdv.core.store import PRODUCTS, SALES, SETTINGS, TENANTS, USERS, JsonStore
from pdv.core.time_utils import utcnow
from pdv.models.product import Product
from pdv.models.sale import Sale
from pdv.models.tenant import Tenant
from pdv.models.user import User

logger = structlog.get_logger(__name__)

# Profile fields a tenant admin may edit; plan and subscription are not among them
TENANT_PROFILE_FIELDS = ("name", "email", "phone", "address")


def get_tenant_settings(store: JsonStore, tenant_id: int) -> dict[str, Any]:
    with store.transaction() as uow:
        tenant = uow.repository(TENANTS, Tenant).get(tenant_id)
        preferences = uow.collection(SETTINGS).get(str(tenant_id), {})
    if tenant is None:
        raise NotFoundError("Loja não encontrada")
    return {"tenant": tenant, "preferences": dict(preferences)}


def update_tenant(store: JsonStore, tenant_id: int, changes: dict[str, Any]) -> Tenant:
    with store.transaction() as uow:
        tenants = uow.repository(TENANTS, Tenant)
        tenant = tenants.get(tenant_id)
        if tenant is None:
            raise NotFoundError("Loja não encontrada")
        for key in TENANT_PROFILE_FIELDS:
            if key in changes:
                setattr(tenant, key, changes[key])
        tenant.updated_at = utcnow()
        tenants.update(tenant)

    logger.info(f"Tenant updated: {tenant_id}", fields=sorted(set(changes) & set(TENANT_PROFILE_FIELDS)))
    return tenant


def update_preferences(store: JsonStore, tenant_id: int, changes: dict[str, Any]) -> dict[str, Any]:
    with store.transaction() as uow:
        settings_doc = uow.collection(SETTINGS)
        preferences = dict(settings_doc.get(str(tenant_id), {}))
        preferences.update(changes)
        settings_doc[str(tenant_id)] = preferences
        uow.mark_dirty(SETTINGS)

    logger.info(f"Preferences updated: {tenant_id}", keys=sorted(changes))
    return preferences


def export_backup(store: JsonStore, tenant_id: int) -> dict[str, Any]:
    """The tenant's slice of every collection, users without password hashes"""
    with store.transaction() as uow:
        tenant = uow.repository(TENANTS, Tenant).get(tenant_id)
        users = uow.repository(USERS, User).list(tenant_id)
        products = uow.repository(PRODUCTS, Product).list(tenant_id)
        sales = uow.repository(SALES, Sale).list(tenant_id)
        preferences = uow.collection(SETTINGS).get(str(tenant_id), {})

    if tenant is None:
        raise NotFoundError("Loja não encontrada")

    logger.info(f"Backup exported: {tenant_id}", products=len(products), sales=len(sales))
    return {
        "exportedAt": utcnow().isoformat(),
        "tenant": tenant.to_document(),
        "users": [u.model_dump(mode="json", by_alias=True, exclude={"password_hash"}) for u in users],
        "products": [p.to_document() for p in products],
        "sales": [s.to_document() for s in sales],
        "settings": dict(preferences),
    }
