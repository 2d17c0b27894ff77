"""
RBAC (Role-Based Access Control) permission system
"""

from enum import Enum
from typing import Set

from pdv.core.errors import ForbiddenError


class Permission(str, Enum):
    """Permission definitions"""
    # Catalog
    PRODUCTS_VIEW = "products:view"
    PRODUCTS_EDIT = "products:edit"

    # Sales
    SALES_CREATE = "sales:create"
    REPORTS_VIEW = "reports:view"

    # Store administration
    SETTINGS_VIEW = "settings:view"
    SETTINGS_EDIT = "settings:edit"
    BACKUP_EXPORT = "backup:export"


_STAFF_PERMISSIONS = {
    Permission.PRODUCTS_VIEW,
    Permission.PRODUCTS_EDIT,
    Permission.SALES_CREATE,
    Permission.REPORTS_VIEW,
    Permission.SETTINGS_VIEW,
}

# Role permission mapping
ROLE_PERMISSIONS = {
    # Admins have all permissions
    "admin": set(Permission),
    "manager": set(_STAFF_PERMISSIONS),
    "cashier": set(_STAFF_PERMISSIONS),
}

# Any role other than admin gets the regular staff permissions
DEFAULT_ROLE = "cashier"


def get_permissions_for_role(role: str) -> Set[Permission]:
    """Get permissions for a given role"""
    return ROLE_PERMISSIONS.get((role or "").lower(), ROLE_PERMISSIONS[DEFAULT_ROLE])


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions


def ensure_permission(role: str, required_permission: Permission) -> None:
    if not has_permission(required_permission, get_permissions_for_role(role)):
        raise ForbiddenError(f"Permissão necessária: {required_permission.value}")
