from .collection import Collection, CollectionConditions, CollectionType, PriceRange
from .envelope import ListEnvelope, error_response
from .requests import (
    CartAddRequest,
    CartOptionsUpdate,
    CartQuantityUpdate,
    CommentCreate,
    CouponValidateRequest,
    StaticPageCreate,
    WishlistAddRequest,
)

__all__ = [
    "Collection",
    "CollectionConditions",
    "CollectionType",
    "PriceRange",
    "ListEnvelope",
    "error_response",
    "CartAddRequest",
    "CartOptionsUpdate",
    "CartQuantityUpdate",
    "CommentCreate",
    "CouponValidateRequest",
    "StaticPageCreate",
    "WishlistAddRequest",
]
