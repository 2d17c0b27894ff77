from pdv.models.base import Record
from pdv.models.tenant import Tenant, SubscriptionStatus
from pdv.models.user import User, UserRole
from pdv.models.product import Product, DEFAULT_LOW_STOCK_ALERT
from pdv.models.sale import Sale, SaleItem, SaleStatus
