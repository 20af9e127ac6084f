from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from ..services.query_engine import QueryOptions
from .routing import RequestContext, RouteGroup
from .utils import found_or_error

group = RouteGroup("products")

_QUERY_KEYS = ("search", "sortBy", "sortOrder", "page", "limit")


@group.get("products")
async def list_products(context: RequestContext):
    catalog = context.backend.catalog
    if not any(key in context.query for key in _QUERY_KEYS):
        return ListEnvelope(await catalog.products(), alias="products")
    options = QueryOptions(
        search=context.query.get("search", ""),
        sort_by=context.query.get("sortBy") or None,
        sort_order=context.query.get("sortOrder", "asc"),
        page=context.query_int("page", 1),
        page_size=context.query_int("limit", 0),
    )
    result = await catalog.search_products(options)
    return ListEnvelope(
        result.items,
        alias="products",
        extras={
            "total": result.total,
            "page": result.page,
            "totalPages": result.total_pages,
            "hasNext": result.has_next,
            "hasPrev": result.has_prev,
        },
    )


@group.get("products/{product_id:int}")
async def get_product(context: RequestContext):
    product = await context.backend.catalog.product(context.params["product_id"])
    return found_or_error(product, "Product not found")


@group.get("products/category/{category_id:int}")
async def products_by_category(context: RequestContext):
    items = await context.backend.catalog.products_by_category(context.params["category_id"])
    return ListEnvelope(items, alias="products")


@group.get("products/subcategory/{subcategory_id:int}")
async def products_by_subcategory(context: RequestContext):
    items = await context.backend.catalog.products_by_subcategory(context.params["subcategory_id"])
    return ListEnvelope(items, alias="products")
