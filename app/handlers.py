import math
import re
from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from .core import parse_product, _make_product
from .database import ProductStore
from .errors import NotFoundError
from .models import Product, ProductPage, ProductStats

# This file contains the logic behind the /api/products endpoints.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int_param(raw: Optional[str], default: int) -> int:
    """Leading-integer parse; absent, non-numeric or zero values give ``default``."""
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    return int(m.group(1)) or default


def _not_found(product_id: str) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found")


def _validation_failed(errors: List[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": errors},
    )


def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    in_stock: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ProductPage:
    out = store.list()
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower()]
    if in_stock:
        flag = in_stock == "true"
        out = [p for p in out if p.inStock == flag]

    page_no = parse_int_param(page, DEFAULT_PAGE)
    per_page = parse_int_param(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    if start < 0 or per_page < 1:
        items: List[Product] = []
    else:
        items = out[start:start + per_page]

    return ProductPage(
        page=page_no,
        limit=per_page,
        total=len(out),
        totalPages=math.ceil(len(out) / per_page),
        products=items,
    )


def get_product_logic(store: ProductStore, product_id: str) -> Product:
    p = store.find_by_id(product_id)
    if p is None:
        raise _not_found(product_id)
    return p


def create_product_logic(store: ProductStore, payload: Any):
    data, errors = parse_product(payload)
    if errors:
        return _validation_failed(errors)
    product = store.insert(_make_product(store.new_id(), data))
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Product created successfully", "product": product.model_dump()},
    )


def update_product_logic(store: ProductStore, product_id: str, payload: Any):
    data, errors = parse_product(payload)
    if errors:
        return _validation_failed(errors)
    product = store.replace(product_id, data.model_dump())
    if product is None:
        raise _not_found(product_id)
    return {"message": "Product updated successfully", "product": product.model_dump()}


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    product = store.remove(product_id)
    if product is None:
        raise _not_found(product_id)
    return {"message": "Product deleted successfully", "product": product.model_dump()}


def stats_logic(store: ProductStore) -> ProductStats:
    products = store.list()
    categories: Dict[str, int] = {}
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1

    in_stock = sum(1 for p in products if p.inStock)
    stats = ProductStats(
        totalProducts=len(products),
        totalInStock=in_stock,
        totalOutOfStock=len(products) - in_stock,
        categories=categories,
    )
    if products:
        # sorted() is stable: equal prices keep insertion order
        by_price = sorted(products, key=lambda p: p.price)
        stats.averagePrice = sum(p.price for p in products) / len(products)
        stats.highestPricedProduct = by_price[-1]
        stats.lowestPricedProduct = by_price[0]
    return stats
