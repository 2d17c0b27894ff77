"""
Tenant directory: lookup and subscription gate
"""

from datetime import datetime
from typing import Optional

import structlog

from pdv.core.errors import ForbiddenError, NotFoundError
from pdv.core.store import TENANTS, JsonStore
from pdv.models.tenant import Tenant

logger = structlog.get_logger(__name__)


def get_tenant(store: JsonStore, tenant_id: int) -> Tenant:
    with store.transaction() as uow:
        tenant = uow.repository(TENANTS, Tenant).get(tenant_id)
    if tenant is None:
        raise NotFoundError("Loja não encontrada")
    return tenant


def resolve_active_tenant(
    store: JsonStore,
    tenant_id: int,
    now: Optional[datetime] = None,
) -> Tenant:
    """Return the tenant if it may be used right now, else raise ForbiddenError"""
    with store.transaction() as uow:
        tenant = uow.repository(TENANTS, Tenant).get(tenant_id)

    if tenant is None:
        logger.warning("Tenant not found", tenant_id=tenant_id)
        raise ForbiddenError("Loja não encontrada")
    if not tenant.is_active:
        logger.warning("Tenant inactive", tenant_id=tenant_id)
        raise ForbiddenError("Loja inativa")
    if not tenant.is_usable(now):
        logger.warning("Tenant subscription lapsed", tenant_id=tenant_id)
        raise ForbiddenError("Assinatura inativa ou período de teste expirado")
    return tenant
