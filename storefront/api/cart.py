from __future__ import annotations

from ..schemas.envelope import ListEnvelope
from ..schemas.requests import CartAddRequest, CartOptionsUpdate, CartQuantityUpdate
from ..services.overlay import UserKey
from .routing import RequestContext, RouteGroup
from .utils import domain_errors, parse_model

group = RouteGroup("cart")


def _user(context: RequestContext) -> UserKey:
    return UserKey(context.params["user"])


@group.get("user/{user}/cart")
async def list_cart(context: RequestContext):
    return ListEnvelope(context.backend.cart.list(_user(context)), alias="cart")


@group.post("user/{user}/cart")
@domain_errors
async def add_to_cart(context: RequestContext):
    request = parse_model(CartAddRequest, context)
    items = await context.backend.cart.add(_user(context), request)
    return {"success": True, "cart": items}


@group.delete("user/{user}/cart")
async def clear_cart(context: RequestContext):
    return {"success": True, "cart": context.backend.cart.clear(_user(context))}


@group.put("user/{user}/cart/update-options")
@group.post("user/{user}/cart/update-options")
@domain_errors
async def update_cart_options(context: RequestContext):
    update = parse_model(CartOptionsUpdate, context)
    return {"success": True, "cart": context.backend.cart.update_options(_user(context), update)}


@group.put("user/{user}/cart/{item_id:int}")
@domain_errors
async def update_cart_quantity(context: RequestContext):
    update = parse_model(CartQuantityUpdate, context)
    items = context.backend.cart.update_quantity(_user(context), context.params["item_id"], update.quantity)
    return {"success": True, "cart": items}


@group.delete("user/{user}/cart/{item_id:int}")
@domain_errors
async def remove_cart_item(context: RequestContext):
    items = context.backend.cart.remove(_user(context), context.params["item_id"])
    return {"success": True, "cart": items}
