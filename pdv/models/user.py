"""
User model with roles and tenant scoping
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from pdv.core.time_utils import utcnow
from pdv.models.base import Record


class UserRole(str, Enum):
    """User roles for RBAC"""
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"


class User(Record):
    """User model with tenant isolation"""

    tenant_id: int
    email: str
    # bcrypt hash, stored under the "password" key
    password_hash: str = Field(alias="password")
    name: str
    role: str = UserRole.CASHIER.value
    is_active: bool = True

    created_at: datetime = Field(default_factory=utcnow)
    last_login_at: Optional[datetime] = None
