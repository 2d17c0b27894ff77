"""
Authentication and tenant dependencies for FastAPI
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from pdv.core.database import get_store
from pdv.core.permissions import Permission, ensure_permission
from pdv.core.security import decode_access_token
from pdv.core.store import JsonStore
from pdv.models.tenant import Tenant
from pdv.services import tenant_service

logger = structlog.get_logger(__name__)
# Missing credentials are reported by decode_access_token as a 401
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Claims of a verified session token"""
    id: int
    email: str
    role: str
    tenant_id: int


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> dict:
    """Verify the bearer token and return its claims"""
    token = credentials.credentials if credentials else None
    return decode_access_token(token)


async def get_current_user(claims: dict = Depends(get_token_claims)) -> CurrentUser:
    user = CurrentUser(
        id=int(claims["sub"]),
        email=claims.get("email", ""),
        role=claims.get("role", ""),
        tenant_id=int(claims["tenant_id"]),
    )
    logger.debug(f"User authenticated: {user.id}")
    return user


def get_active_tenant(
    current_user: CurrentUser = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> Tenant:
    """Tenant gate: runs on every tenant-scoped request"""
    return tenant_service.resolve_active_tenant(store, current_user.tenant_id)


def require_permission(required_permission: Permission):
    """Dependency factory to check permissions"""
    def check_permission(
        current_user: CurrentUser = Depends(get_current_user),
        tenant: Tenant = Depends(get_active_tenant),
    ) -> CurrentUser:
        ensure_permission(current_user.role, required_permission)
        return current_user
    return check_permission
