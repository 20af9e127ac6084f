from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from ..schemas.requests import WishlistAddRequest
from ..services.overlay import UserKey
from .routing import RequestContext, RouteGroup
from .utils import domain_errors, parse_model

group = RouteGroup("wishlist")


def _user(context: RequestContext) -> UserKey:
    return UserKey(context.params["user"])


@group.get("user/{user}/wishlist")
async def list_wishlist(context: RequestContext):
    return ListEnvelope(context.backend.wishlist.list(_user(context)), alias="wishlist")


@group.post("user/{user}/wishlist")
@domain_errors
async def add_to_wishlist(context: RequestContext):
    request = parse_model(WishlistAddRequest, context)
    return {"success": True, "wishlist": context.backend.wishlist.add(_user(context), request.product_id)}


@group.delete("user/{user}/wishlist")
async def clear_wishlist(context: RequestContext):
    return {"success": True, "wishlist": context.backend.wishlist.clear(_user(context))}


@group.delete("user/{user}/wishlist/product/{product_id:int}")
async def remove_from_wishlist(context: RequestContext):
    items = context.backend.wishlist.remove(_user(context), context.params["product_id"])
    return {"success": True, "wishlist": items}


@group.get("user/{user}/wishlist/check/{product_id:int}")
async def check_wishlist(context: RequestContext):
    return {"exists": context.backend.wishlist.contains(_user(context), context.params["product_id"])}
