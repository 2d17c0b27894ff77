"""
Demo data for a fresh installation
"""

from datetime import timedelta
from typing import Optional

import structlog

from pdv.core.config import get_settings
from pdv.core.security import hash_password
from pdv.core.store import TENANTS, USERS, JsonStore
from pdv.core.time_utils import utcnow
from pdv.models.tenant import SubscriptionStatus, Tenant
from pdv.models.user import User, UserRole

logger = structlog.get_logger(__name__)
settings = get_settings()

DEMO_STORE_NAME = "Loja Demo"
DEMO_ADMIN_EMAIL = "admin@pdv.com"
DEMO_ADMIN_PASSWORD = "admin123"


def seed_demo_data(store: JsonStore) -> Optional[User]:
    """Create the demo tenant and admin when no user exists yet"""
    now = utcnow()
    with store.transaction() as uow:
        users = uow.repository(USERS, User)
        if users.list():
            return None

        tenant = uow.repository(TENANTS, Tenant).insert(Tenant(
            name=DEMO_STORE_NAME,
            email=DEMO_ADMIN_EMAIL,
            plan="basic",
            subscription_status=SubscriptionStatus.ACTIVE.value,
            trial_ends=now + timedelta(days=settings.TRIAL_PERIOD_DAYS),
            created_at=now,
        ))
        admin = users.insert(User(
            tenant_id=tenant.id,
            email=DEMO_ADMIN_EMAIL,
            password_hash=hash_password(DEMO_ADMIN_PASSWORD),
            name="Administrador",
            role=UserRole.ADMIN.value,
            created_at=now,
        ))

    logger.info("Demo data seeded", tenant_id=tenant.id, user_id=admin.id)
    return admin
