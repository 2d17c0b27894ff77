"""
Unit tests for registration and login
"""

from datetime import datetime, timedelta, timezone

import pytest

from pdv.core.errors import AuthError, ConflictError, ValidationError
from pdv.core.security import decode_access_token
from pdv.core.store import TENANTS, USERS, JsonStore
from pdv.models.user import User
from pdv.services import auth_service


def test_register_creates_trial_tenant_and_admin(store: JsonStore):
    """Test that trialEnds is exactly 30 days after creation"""
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    registration = auth_service.register(
        store, "dono@lojax.com", "segredo123", "Dono", "Loja X", now=now
    )

    tenant = registration.tenant
    assert tenant.name == "Loja X"
    assert tenant.plan == "trial"
    assert tenant.subscription_status == "trial"
    assert tenant.is_active
    assert tenant.trial_ends - tenant.created_at == timedelta(days=30)

    user = registration.user
    assert user.role == "admin"
    assert user.tenant_id == tenant.id
    assert user.password_hash != "segredo123"

    claims = decode_access_token(registration.token)
    assert claims["sub"] == str(user.id)
    assert claims["tenant_id"] == tenant.id
    assert claims["email"] == "dono@lojax.com"
    assert claims["role"] == "admin"

    assert len(store.read(TENANTS)) == 1
    assert store.read(USERS)[0]["password"] == user.password_hash


@pytest.mark.parametrize("fields", [
    (None, "segredo123", "Dono", "Loja X"),
    ("a@b.com", None, "Dono", "Loja X"),
    ("a@b.com", "segredo123", "", "Loja X"),
    ("a@b.com", "segredo123", "Dono", None),
])
def test_register_requires_all_fields(store: JsonStore, fields):
    with pytest.raises(ValidationError):
        auth_service.register(store, *fields)
    assert store.read(USERS) == []


def test_register_rejects_short_password(store: JsonStore):
    with pytest.raises(ValidationError):
        auth_service.register(store, "a@b.com", "12345", "Dono", "Loja X")


def test_register_rejects_duplicate_email(store: JsonStore):
    auth_service.register(store, "a@b.com", "segredo123", "Dono", "Loja X")

    with pytest.raises(ConflictError):
        auth_service.register(store, "a@b.com", "outrasenha", "Outro", "Loja Y")

    # different case is a different email
    auth_service.register(store, "A@b.com", "outrasenha", "Outro", "Loja Y")
    assert len(store.read(TENANTS)) == 2


def test_tenants_get_distinct_ids(store: JsonStore):
    first = auth_service.register(store, "a@b.com", "segredo123", "A", "Loja A")
    second = auth_service.register(store, "c@d.com", "segredo123", "C", "Loja C")
    assert first.tenant.id != second.tenant.id
    assert second.user.tenant_id == second.tenant.id


def test_login_success(store: JsonStore):
    auth_service.register(store, "a@b.com", "segredo123", "Dono", "Loja X")

    result = auth_service.login(store, "a@b.com", "segredo123")

    assert result.user.email == "a@b.com"
    assert result.user.last_login_at is not None
    assert decode_access_token(result.token)["sub"] == str(result.user.id)


def test_login_wrong_password(store: JsonStore):
    auth_service.register(store, "a@b.com", "segredo123", "Dono", "Loja X")
    with pytest.raises(AuthError) as exc_info:
        auth_service.login(store, "a@b.com", "errada")
    assert exc_info.value.status_code == 401


def test_login_unknown_email(store: JsonStore):
    with pytest.raises(AuthError):
        auth_service.login(store, "ninguem@b.com", "segredo123")


def test_login_inactive_user(store: JsonStore):
    registration = auth_service.register(store, "a@b.com", "segredo123", "Dono", "Loja X")
    with store.transaction() as uow:
        users = uow.repository(USERS, User)
        user = users.get(registration.user.id)
        user.is_active = False
        users.update(user)

    with pytest.raises(AuthError):
        auth_service.login(store, "a@b.com", "segredo123")
