"""
Credential service: registration, login and current-user lookup
"""

from datetime import datetime, timedelta
from typing import NamedTuple, Optional

import structlog

from pdv.core.config import get_settings
from pdv.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from pdv.core.security import create_access_token, hash_password, verify_password
from pdv.core.store import TENANTS, USERS, JsonStore
from pdv.core.time_utils import utcnow
from pdv.models.tenant import SubscriptionStatus, Tenant
from pdv.models.user import User, UserRole

logger = structlog.get_logger(__name__)
settings = get_settings()

MIN_PASSWORD_LENGTH = 6


class Registration(NamedTuple):
    user: User
    tenant: Tenant
    token: str


class LoginResult(NamedTuple):
    user: User
    token: str


def issue_token(user: User) -> str:
    return create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
    )


def register(
    store: JsonStore,
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    store_name: Optional[str],
    now: Optional[datetime] = None,
) -> Registration:
    """Create a trial tenant and its admin user"""
    if not email or not password or not name or not store_name:
        raise ValidationError("Email, senha, nome e nome da loja são obrigatórios")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres")

    created_at = now or utcnow()
    password_hash = hash_password(password)

    with store.transaction() as uow:
        users = uow.repository(USERS, User)
        if users.find(lambda u: u.email == email) is not None:
            raise ConflictError("Email já cadastrado")

        tenant = uow.repository(TENANTS, Tenant).insert(Tenant(
            name=store_name,
            email=email,
            plan="trial",
            subscription_status=SubscriptionStatus.TRIAL.value,
            trial_ends=created_at + timedelta(days=settings.TRIAL_PERIOD_DAYS),
            is_active=True,
            created_at=created_at,
        ))
        user = users.insert(User(
            tenant_id=tenant.id,
            email=email,
            password_hash=password_hash,
            name=name,
            role=UserRole.ADMIN.value,
            is_active=True,
            created_at=created_at,
        ))

    logger.info(f"Tenant registered: {tenant.id}", user_id=user.id)
    return Registration(user=user, tenant=tenant, token=issue_token(user))


def login(store: JsonStore, email: Optional[str], password: Optional[str]) -> LoginResult:
    """Authenticate by email and password"""
    if not email or not password:
        raise AuthError("Credenciais inválidas")

    with store.transaction() as uow:
        users = uow.repository(USERS, User)
        user = users.find(lambda u: u.email == email and u.is_active)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt", email=email)
            raise AuthError("Credenciais inválidas")

        user.last_login_at = utcnow()
        users.update(user)

    logger.info(f"User logged in: {user.id}")
    return LoginResult(user=user, token=issue_token(user))


def get_user(store: JsonStore, user_id: int, tenant_id: int) -> User:
    with store.transaction() as uow:
        user = uow.repository(USERS, User).get(user_id, tenant_id=tenant_id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    return user
