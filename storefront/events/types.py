from enum import Enum


class EventType(str, Enum):
    CART_UPDATED = "cart_updated"
    WISHLIST_UPDATED = "wishlist_updated"
    WISHLIST_CLEARED = "wishlist_cleared"
    COMMENTS_UPDATED = "comments_updated"
    STATIC_PAGES_CHANGED = "static_pages_changed"
