"""
Product catalog API endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
import structlog

from pdv.core.database import get_store
from pdv.core.dependencies import CurrentUser, require_permission
from pdv.core.permissions import Permission
from pdv.core.store import JsonStore
from pdv.models.product import Product
from pdv.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from pdv.services import catalog_service

logger = structlog.get_logger(__name__)
router = APIRouter()


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product.to_document())


@router.get("", response_model=List[ProductResponse])
def list_products(
    current_user: CurrentUser = Depends(require_permission(Permission.PRODUCTS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """List the tenant's products in storage order"""
    products = catalog_service.list_products(store, current_user.tenant_id)
    return [_to_response(p) for p in products]


@router.get("/search", response_model=List[ProductResponse])
def search_products(
    q: Optional[str] = Query(None, description="Search by name or barcode"),
    barcode: Optional[str] = Query(None, description="Exact barcode match"),
    current_user: CurrentUser = Depends(require_permission(Permission.PRODUCTS_VIEW)),
    store: JsonStore = Depends(get_store)
):
    """Search products, at most 50 results"""
    products = catalog_service.search_products(store, current_user.tenant_id, query=q, barcode=barcode)
    return [_to_response(p) for p in products]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    current_user: CurrentUser = Depends(require_permission(Permission.PRODUCTS_EDIT)),
    store: JsonStore = Depends(get_store)
):
    """Create a new product"""
    product = catalog_service.create_product(
        store,
        current_user.tenant_id,
        product_data.model_dump(exclude_unset=True),
    )
    return _to_response(product)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    current_user: CurrentUser = Depends(require_permission(Permission.PRODUCTS_EDIT)),
    store: JsonStore = Depends(get_store)
):
    """Update a product with the fields sent"""
    product = catalog_service.update_product(
        store,
        current_user.tenant_id,
        product_id,
        product_data.model_dump(exclude_unset=True),
    )
    return _to_response(product)
