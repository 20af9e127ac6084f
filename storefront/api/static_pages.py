from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from ..schemas.requests import StaticPageCreate
from .routing import RequestContext, RouteGroup
from .utils import domain_errors, parse_model

group = RouteGroup("static-pages")


@group.get("static-pages")
async def list_pages(context: RequestContext):
    return ListEnvelope(await context.backend.static_pages.list(), alias="pages")


@group.post("static-pages")
@domain_errors
async def create_page(context: RequestContext):
    payload = parse_model(StaticPageCreate, context)
    return await context.backend.static_pages.create(payload)


@group.get("static-pages/slug/{slug}")
@domain_errors
async def get_page_by_slug(context: RequestContext):
    return await context.backend.static_pages.get_by_slug(context.params["slug"])


@group.get("static-pages/{page_id:int}")
@domain_errors
async def get_page(context: RequestContext):
    return await context.backend.static_pages.get(context.params["page_id"])


@group.put("static-pages/{page_id:int}")
@domain_errors
async def update_page(context: RequestContext):
    return await context.backend.static_pages.update(context.params["page_id"], context.json)


@group.delete("static-pages/{page_id:int}")
@domain_errors
async def delete_page(context: RequestContext):
    await context.backend.static_pages.delete(context.params["page_id"])
    return {"success": True}
