from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from .routing import RequestContext, RouteGroup
from .utils import found_or_error

group = RouteGroup("collections")


@group.get("collections")
async def list_collections(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.collections(), alias="collections")


@group.get("collections/{ref}")
async def get_collection(context: RequestContext):
    collection = await context.backend.catalog.collection(context.params["ref"])
    return found_or_error(collection, "Collection not found")


@group.get("collections/{ref}/products")
async def collection_products(context: RequestContext):
    limit = context.query_int("limit")
    items = await context.backend.catalog.collection_products(context.params["ref"], limit)
    return ListEnvelope(items, alias="products")
