"""
Sale processor

Records a sale and applies its stock movements in a single store
transaction, so the sales and products documents are committed together.

Stock policy:
  * stock never goes below zero; a line item selling more than is on hand
    leaves the product at 0 and the deficit is not tracked anywhere;
  * a line item whose product does not exist for the tenant is still
    recorded as sold, with no stock movement.
Both are candidates for real backorder/reconciliation handling.
"""

from datetime import datetime
from typing import Any, Optional

import structlog

from pdv.core.errors import ValidationError
from pdv.core.store import PRODUCTS, SALES, JsonStore
from pdv.core.time_utils import utcnow
from pdv.models.product import Product
from pdv.models.sale import Sale, SaleItem, SaleStatus

logger = structlog.get_logger(__name__)


def calculate_total(items: list[SaleItem]) -> float:
    """Sum of price x quantity using the prices charged"""
    return sum(item.subtotal for item in items)


def apply_stock_movement(product: Product, quantity: int, now: datetime) -> Product:
    """Decrement stock, clamped at zero"""
    product.stock = max(0, product.stock - quantity)
    product.updated_at = now
    return product


def _parse_items(raw_items: Any) -> list[SaleItem]:
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("A venda deve conter pelo menos um item")
    items = []
    for raw in raw_items:
        if isinstance(raw, SaleItem):
            items.append(raw)
        elif isinstance(raw, dict):
            try:
                items.append(SaleItem.model_validate(raw))
            except ValueError as exc:
                raise ValidationError(f"Item de venda inválido: {exc}") from exc
        else:
            raise ValidationError("Item de venda inválido")
    return items


def record_sale(
    store: JsonStore,
    tenant_id: int,
    user_id: int,
    items: Any,
    payment_method: Optional[str],
    cash_received: Optional[float] = None,
    cash_change: Optional[float] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Sale:
    """Validate, total, persist the sale and decrement stock atomically"""
    line_items = _parse_items(items)
    if not payment_method:
        raise ValidationError("Forma de pagamento é obrigatória")

    now = now or utcnow()

    with store.transaction() as uow:
        products = uow.repository(PRODUCTS, Product)
        sales = uow.repository(SALES, Sale)

        for item in line_items:
            if item.product_id is None:
                continue
            product = products.get(item.product_id, tenant_id=tenant_id)
            if product is None:
                logger.warning(
                    "Sold item has no matching product, stock unchanged",
                    tenant_id=tenant_id,
                    product_id=item.product_id,
                )
                continue
            if item.product_name is None:
                item.product_name = product.name
            if item.quantity > product.stock:
                logger.warning(
                    "Stock clamped at zero",
                    tenant_id=tenant_id,
                    product_id=product.id,
                    deficit=item.quantity - product.stock,
                )
            products.update(apply_stock_movement(product, item.quantity, now))

        sale = sales.insert(Sale(
            tenant_id=tenant_id,
            user_id=user_id,
            items=line_items,
            total=calculate_total(line_items),
            payment_method=payment_method,
            cash_received=cash_received,
            cash_change=cash_change,
            status=SaleStatus.COMPLETED.value,
            notes=notes,
            created_at=now,
        ))

    logger.info(f"Sale recorded: {sale.id}", tenant_id=tenant_id, total=sale.total)
    return sale
