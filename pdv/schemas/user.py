"""
Pydantic schemas for users and tenants
"""

from datetime import datetime
from typing import Optional

from pdv.schemas.base import CamelModel


class UserResponse(CamelModel):
    """User without the password hash"""
    id: int
    email: str
    name: str
    role: str
    tenant_id: int
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class TenantResponse(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    plan: str
    subscription_status: str
    trial_ends: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class TenantUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class MeResponse(CamelModel):
    user: UserResponse
    tenant: TenantResponse


class SettingsResponse(CamelModel):
    tenant: TenantResponse
    preferences: dict
