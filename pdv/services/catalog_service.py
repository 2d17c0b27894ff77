"""
Catalog manager: tenant-scoped product CRUD and search
"""

from typing import Any, Optional

import structlog

from pdv.core.errors import NotFoundError, ValidationError
from pdv.core.store import PRODUCTS, JsonStore
from pdv.core.time_utils import utcnow
from pdv.models.product import Product

logger = structlog.get_logger(__name__)

SEARCH_LIMIT = 50

# Fields a caller may never overwrite through an update
_PROTECTED_FIELDS = {"id", "tenant_id", "created_at", "updated_at"}
# Sending null for these leaves the stored value in place
_REQUIRED_FIELDS = {"name", "price", "stock"}


def list_products(store: JsonStore, tenant_id: int) -> list[Product]:
    with store.transaction() as uow:
        return uow.repository(PRODUCTS, Product).list(tenant_id)


def search_products(
    store: JsonStore,
    tenant_id: int,
    query: Optional[str] = None,
    barcode: Optional[str] = None,
) -> list[Product]:
    """Exact barcode match, else case-insensitive name/barcode substring"""
    products = list_products(store, tenant_id)

    if barcode:
        matches = [p for p in products if p.barcode == barcode]
    elif query:
        needle = query.casefold()
        matches = [
            p for p in products
            if needle in p.name.casefold() or needle in (p.barcode or "").casefold()
        ]
    else:
        matches = products
    return matches[:SEARCH_LIMIT]


def create_product(store: JsonStore, tenant_id: int, fields: dict[str, Any]) -> Product:
    """Add a product; name, price and stock are required (stock may be 0)"""
    if not fields.get("name") or fields.get("price") is None or fields.get("stock") is None:
        raise ValidationError("Nome, preço e estoque são obrigatórios")

    now = utcnow()
    data = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
    product = Product(tenant_id=tenant_id, created_at=now, updated_at=now, **data)

    with store.transaction() as uow:
        product = uow.repository(PRODUCTS, Product).insert(product)

    logger.info(f"Created product {product.id}", tenant_id=tenant_id)
    return product


def update_product(
    store: JsonStore,
    tenant_id: int,
    product_id: int,
    changes: dict[str, Any],
) -> Product:
    """Shallow-merge ``changes`` over the stored product; no re-validation of the result"""
    with store.transaction() as uow:
        products = uow.repository(PRODUCTS, Product)
        product = products.get(product_id, tenant_id=tenant_id)
        if product is None:
            raise NotFoundError("Produto não encontrado")

        for key, value in changes.items():
            if key in _PROTECTED_FIELDS:
                continue
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(product, key, value)
        product.updated_at = utcnow()
        products.update(product)

    logger.info(f"Updated product {product_id}", tenant_id=tenant_id)
    return product
