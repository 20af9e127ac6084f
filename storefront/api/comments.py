from __future__ import annotations

from ..schemas.requests import CommentCreate
from ..services.comments import DEFAULT_PAGE_SIZE
from .routing import RequestContext, RouteGroup
from .utils import domain_errors, parse_model

group = RouteGroup("comments")


@group.get("comments")
async def list_comments(context: RequestContext):
    result = context.backend.comments.search(
        search=context.query.get("search", ""),
        product_id=context.query.get("productId"),
        sort_by=context.query.get("sortBy") or "createdAt",
        sort_order=(context.query.get("sortOrder") or "desc").lower(),
        page=context.query_int("page", 1),
        limit=context.query_int("limit", DEFAULT_PAGE_SIZE),
    )
    return result.to_dict("comments")


@group.post("comments")
@domain_errors
async def create_comment(context: RequestContext):
    payload = parse_model(CommentCreate, context)
    return await context.backend.comments.create(payload)


@group.get("comments/product/{product_id:int}")
async def comments_for_product(context: RequestContext):
    return {"comments": context.backend.comments.for_product(context.params["product_id"])}


@group.get("comments/{comment_id:int}")
@domain_errors
async def get_comment(context: RequestContext):
    return context.backend.comments.get(context.params["comment_id"])


@group.put("comments/{comment_id:int}")
@domain_errors
async def update_comment(context: RequestContext):
    return context.backend.comments.update(context.params["comment_id"], context.json)


@group.delete("comments/{comment_id:int}")
@domain_errors
async def delete_comment(context: RequestContext):
    context.backend.comments.delete(context.params["comment_id"])
    return {"success": True}
