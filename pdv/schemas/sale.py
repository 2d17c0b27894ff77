"""
Pydantic schemas for sales and reports
"""

from datetime import datetime
from typing import Optional

from pdv.schemas.base import CamelModel


class SaleItemIn(CamelModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    price: float
    quantity: int


class SaleCreate(CamelModel):
    """Sale body; item presence and payment method are checked by the sale processor"""
    items: Optional[list[SaleItemIn]] = None
    payment_method: Optional[str] = None
    cash_received: Optional[float] = None
    cash_change: Optional[float] = None
    notes: Optional[str] = None


class SaleItemRead(CamelModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    price: float
    quantity: int


class SaleRead(CamelModel):
    id: int
    tenant_id: int
    user_id: int
    items: list[SaleItemRead]
    total: float
    payment_method: Optional[str] = None
    cash_received: Optional[float] = None
    cash_change: Optional[float] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime


class TopProduct(CamelModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    quantity: int
    revenue: float


class SalesStats(CamelModel):
    total_sales: int
    total_revenue: float
    average_ticket: float
    top_products: list[TopProduct]


class RecentSale(CamelModel):
    id: int
    total: float
    payment_method: Optional[str] = None
    created_at: datetime
    item_count: int


class DashboardOverview(CamelModel):
    total_sales: int
    total_revenue: float
    low_stock_count: int
    average_ticket: float
    payment_methods: dict[str, int]
    recent_sales: list[RecentSale]
