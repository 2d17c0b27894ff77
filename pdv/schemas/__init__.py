"""
Schemas for API responses and requests
"""

from pdv.schemas.token import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from pdv.schemas.user import MeResponse, SettingsResponse, TenantResponse, TenantUpdate, UserResponse
from pdv.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from pdv.schemas.sale import DashboardOverview, SaleCreate, SaleRead, SalesStats

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "MeResponse",
    "SettingsResponse",
    "TenantResponse",
    "TenantUpdate",
    "UserResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "DashboardOverview",
    "SaleCreate",
    "SaleRead",
    "SalesStats",
]
