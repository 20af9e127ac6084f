from .cart import group as cart_group
from .categories import group as categories_group
from .collections import group as collections_group
from .comments import group as comments_group
from .products import group as products_group
from .reference import group as reference_group
from .routing import UNHANDLED, RequestContext, RequestRouter, Route, RouteGroup
from .static_pages import group as static_pages_group
from .wishlist import group as wishlist_group

DEFAULT_GROUPS = (
    products_group,
    categories_group,
    collections_group,
    cart_group,
    wishlist_group,
    comments_group,
    static_pages_group,
    reference_group,
)

__all__ = [
    "UNHANDLED",
    "DEFAULT_GROUPS",
    "RequestContext",
    "RequestRouter",
    "Route",
    "RouteGroup",
    "cart_group",
    "categories_group",
    "collections_group",
    "comments_group",
    "products_group",
    "reference_group",
    "static_pages_group",
    "wishlist_group",
]
