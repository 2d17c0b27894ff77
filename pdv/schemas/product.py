"""
Pydantic schemas for catalog endpoints
"""

from datetime import datetime
from typing import Optional

from pdv.schemas.base import CamelModel


class ProductCreate(CamelModel):
    """Required fields are checked by the catalog service"""
    barcode: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    cost: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    low_stock_alert: Optional[int] = None


class ProductUpdate(CamelModel):
    """Partial update; only the fields sent are merged"""
    barcode: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    cost: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    low_stock_alert: Optional[int] = None


class ProductResponse(CamelModel):
    id: int
    tenant_id: int
    barcode: Optional[str] = None
    name: str
    price: float
    cost: Optional[float] = None
    stock: int
    category: Optional[str] = None
    low_stock_alert: Optional[int] = None
    created_at: datetime
    updated_at: datetime
