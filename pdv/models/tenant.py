"""
Tenant model - Multi-tenancy foundation
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from pdv.core.time_utils import as_utc, utcnow
from pdv.models.base import Record


class SubscriptionStatus(str, Enum):
    """Known subscription states; other values are kept verbatim"""
    TRIAL = "trial"
    ACTIVE = "active"


class Tenant(Record):
    """Store account owning its own users, products and sales"""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    # Subscription
    plan: str = Field(default="trial", description="Subscription plan: trial, basic, pro")
    subscription_status: str = SubscriptionStatus.TRIAL.value
    trial_ends: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    is_active: bool = True

    def is_usable(self, now: Optional[datetime] = None) -> bool:
        """Active, and either subscribed or still inside the trial window"""
        if not self.is_active:
            return False
        if self.subscription_status == SubscriptionStatus.ACTIVE.value:
            return True
        if self.trial_ends is None:
            return False
        return as_utc(now or utcnow()) < as_utc(self.trial_ends)
