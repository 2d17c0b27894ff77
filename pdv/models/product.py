"""
Product model - tenant catalog entry
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pdv.core.time_utils import utcnow
from pdv.models.base import Record

DEFAULT_LOW_STOCK_ALERT = 5


class Product(Record):
    tenant_id: int
    barcode: Optional[str] = None
    name: str
    price: float
    cost: Optional[float] = None
    stock: int = 0
    category: Optional[str] = None
    low_stock_alert: Optional[int] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_low_stock(self) -> bool:
        threshold = self.low_stock_alert if self.low_stock_alert is not None else DEFAULT_LOW_STOCK_ALERT
        return self.stock < threshold
