"""
Unit tests for the tenant subscription gate
"""

from datetime import datetime, timedelta, timezone

import pytest

from pdv.core.errors import ForbiddenError
from pdv.core.store import TENANTS, JsonStore
from pdv.models.tenant import Tenant
from pdv.services import tenant_service

NOW = datetime(2026, 5, 10, 9, 30, tzinfo=timezone.utc)


def _add_tenant(store: JsonStore, **fields) -> Tenant:
    with store.transaction() as uow:
        return uow.repository(TENANTS, Tenant).insert(Tenant(name="Loja", **fields))


def test_trial_within_period_is_usable(store: JsonStore):
    tenant = _add_tenant(store, subscription_status="trial", trial_ends=NOW + timedelta(days=1))
    assert tenant_service.resolve_active_tenant(store, tenant.id, now=NOW).id == tenant.id


def test_expired_trial_is_forbidden(store: JsonStore):
    tenant = _add_tenant(store, subscription_status="trial", trial_ends=NOW - timedelta(seconds=1))
    with pytest.raises(ForbiddenError):
        tenant_service.resolve_active_tenant(store, tenant.id, now=NOW)


def test_active_subscription_ignores_trial_end(store: JsonStore):
    tenant = _add_tenant(store, subscription_status="active", trial_ends=NOW - timedelta(days=90))
    assert tenant_service.resolve_active_tenant(store, tenant.id, now=NOW).id == tenant.id


def test_inactive_tenant_is_forbidden(store: JsonStore):
    tenant = _add_tenant(
        store,
        subscription_status="active",
        trial_ends=NOW + timedelta(days=1),
        is_active=False,
    )
    with pytest.raises(ForbiddenError):
        tenant_service.resolve_active_tenant(store, tenant.id, now=NOW)


def test_other_status_falls_back_to_trial_window(store: JsonStore):
    tenant = _add_tenant(store, subscription_status="past_due", trial_ends=NOW - timedelta(days=1))
    with pytest.raises(ForbiddenError):
        tenant_service.resolve_active_tenant(store, tenant.id, now=NOW)


def test_missing_tenant_is_forbidden(store: JsonStore):
    with pytest.raises(ForbiddenError):
        tenant_service.resolve_active_tenant(store, 42, now=NOW)
