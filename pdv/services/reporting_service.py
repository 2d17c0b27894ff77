"""
Reporting engine: today's sales, ranged statistics and the dashboard overview

Every report is derived by scanning the tenant's sales on each request.
"""

from collections import Counter
from datetime import date, datetime
from typing import Any, Optional

from pdv.core.store import PRODUCTS, SALES, JsonStore
from pdv.core.time_utils import as_utc, end_of_day, start_of_day, utcnow
from pdv.models.product import Product
from pdv.models.sale import Sale, SaleStatus

TOP_PRODUCTS_LIMIT = 10
RECENT_SALES_LIMIT = 10
UNKNOWN_PAYMENT_METHOD = "unknown"


def _completed_sales(store: JsonStore, tenant_id: int) -> list[Sale]:
    with store.transaction() as uow:
        sales = uow.repository(SALES, Sale).list(tenant_id)
    return [s for s in sales if s.status == SaleStatus.COMPLETED.value]


def average_ticket(total_revenue: float, total_sales: int) -> float:
    return total_revenue / total_sales if total_sales > 0 else 0


def todays_sales(store: JsonStore, tenant_id: int, now: Optional[datetime] = None) -> list[Sale]:
    today = as_utc(now or utcnow()).date()
    return [
        s for s in _completed_sales(store, tenant_id)
        if as_utc(s.created_at).date() == today
    ]


def top_products(sales: list[Sale], limit: int = TOP_PRODUCTS_LIMIT) -> list[dict[str, Any]]:
    """Quantity and revenue per product, highest quantity first"""
    totals: dict[Any, dict[str, Any]] = {}
    for sale in sales:
        for item in sale.items:
            entry = totals.setdefault(item.product_id, {
                "productId": item.product_id,
                "productName": item.product_name,
                "quantity": 0,
                "revenue": 0.0,
            })
            entry["quantity"] += item.quantity
            entry["revenue"] += item.subtotal
    # sorted() is stable, so ties keep the order products were first seen
    ranked = sorted(totals.values(), key=lambda entry: entry["quantity"], reverse=True)
    return ranked[:limit]


def sales_stats(
    store: JsonStore,
    tenant_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> dict[str, Any]:
    """Totals over an inclusive date range; end_date covers its whole day"""
    sales = _completed_sales(store, tenant_id)
    if start_date is not None:
        start = start_of_day(start_date)
        sales = [s for s in sales if as_utc(s.created_at) >= start]
    if end_date is not None:
        end = end_of_day(end_date)
        sales = [s for s in sales if as_utc(s.created_at) <= end]

    total_sales = len(sales)
    total_revenue = sum(s.total for s in sales)
    return {
        "totalSales": total_sales,
        "totalRevenue": total_revenue,
        "averageTicket": average_ticket(total_revenue, total_sales),
        "topProducts": top_products(sales),
    }


def dashboard_overview(store: JsonStore, tenant_id: int, now: Optional[datetime] = None) -> dict[str, Any]:
    sales = todays_sales(store, tenant_id, now=now)
    with store.transaction() as uow:
        products = uow.repository(PRODUCTS, Product).list(tenant_id)

    total_sales = len(sales)
    total_revenue = sum(s.total for s in sales)
    payment_methods = Counter(s.payment_method or UNKNOWN_PAYMENT_METHOD for s in sales)
    recent = sorted(sales, key=lambda s: as_utc(s.created_at), reverse=True)[:RECENT_SALES_LIMIT]

    return {
        "totalSales": total_sales,
        "totalRevenue": total_revenue,
        "lowStockCount": sum(1 for p in products if p.is_low_stock),
        "averageTicket": average_ticket(total_revenue, total_sales),
        "paymentMethods": dict(payment_methods),
        "recentSales": [
            {
                "id": s.id,
                "total": s.total,
                "paymentMethod": s.payment_method,
                "createdAt": s.created_at,
                "itemCount": len(s.items),
            }
            for s in recent
        ],
    }
