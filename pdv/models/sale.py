"""
Sale model - immutable record of a completed checkout
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pdv.core.time_utils import utcnow
from pdv.models.base import Record


class SaleStatus(str, Enum):
    COMPLETED = "completed"


class SaleItem(BaseModel):
    """Line item as charged; price comes from the request, not the catalog"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: Optional[int] = None
    product_name: Optional[str] = None
    price: float
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Sale(Record):
    tenant_id: int
    user_id: int
    items: list[SaleItem]
    total: float
    payment_method: Optional[str] = None
    cash_received: Optional[float] = None
    cash_change: Optional[float] = None
    status: str = SaleStatus.COMPLETED.value
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
