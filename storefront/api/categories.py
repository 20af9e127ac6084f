from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from .routing import RequestContext, RouteGroup
from .utils import found_or_error

group = RouteGroup("categories")


@group.get("categories")
async def list_categories(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.categories(), alias="categories")


@group.get("categories/{category_id:int}")
async def get_category(context: RequestContext):
    category = await context.backend.catalog.category(context.params["category_id"])
    return found_or_error(category, "Category not found")


@group.get("subcategories")
async def list_subcategories(context: RequestContext):
    return ListEnvelope(await context.backend.catalog.subcategories(), alias="subcategories")


@group.get("subcategories/by-parent/{parent_id:int}")
async def subcategories_by_parent(context: RequestContext):
    items = await context.backend.catalog.subcategories(context.params["parent_id"])
    return ListEnvelope(items, alias="subcategories")


@group.get("subcategories/{subcategory_id:int}")
async def get_subcategory(context: RequestContext):
    subcategory = await context.backend.catalog.subcategory(context.params["subcategory_id"])
    return found_or_error(subcategory, "Subcategory not found")
