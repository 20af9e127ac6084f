from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..exceptions import EntityNotFoundError
from ..schemas.requests import CartAddRequest, CartOptionsUpdate
from .catalog import CatalogService
from .overlay import CartDocument, CartRepository, UserKey

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_NAME = "Product"


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def add_ons_total(add_ons: Iterable[Any]) -> float:
    total = 0.0
    for add_on in add_ons or []:
        if isinstance(add_on, dict):
            total += _number(add_on.get("price"))
    return total


def _recompute_total(item: dict[str, Any]) -> None:
    base = item.get("basePrice")
    if base is None:
        return
    item["totalPrice"] = (_number(base) + _number(item.get("addOnsPrice"))) * int(item.get("quantity") or 1)


class CartService:
    """Per-user cart lines stored in the overlay."""

    def __init__(self, catalog: CatalogService, repository: CartRepository, *, placeholder: str = "") -> None:
        self.catalog = catalog
        self.repository = repository
        self.placeholder = placeholder

    def list(self, user: UserKey) -> list[dict[str, Any]]:
        return self.repository.read(user).items

    async def add(self, user: UserKey, request: CartAddRequest) -> list[dict[str, Any]]:
        if request.product_id is None:
            raise ValueError("productId is required")
        quantity = 1 if request.quantity is None else int(request.quantity)
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        # fetch before reading the document so the read-modify-write has no await inside
        product = await self.catalog.product(request.product_id)

        document = self.repository.read(user)
        for item in document.items:
            if int(item.get("productId") or 0) == request.product_id:
                item["quantity"] = int(item.get("quantity") or 1) + quantity
                _recompute_total(item)
                self.repository.write(user, document)
                return document.items

        item = self._new_item(document, request, quantity, product)
        document.items.append(item)
        self.repository.write(user, document)
        logger.debug("cart line %s added for user %s", item["id"], user)
        return document.items

    def _new_item(
        self,
        document: CartDocument,
        request: CartAddRequest,
        quantity: int,
        product: Optional[dict[str, Any]],
    ) -> dict[str, Any]:
        product = product or {}
        price = _number(product.get("price"), _number(request.price))
        modifier = _number(request.product_options_price_modifier)
        base_price = request.base_price if request.base_price is not None else price + modifier
        add_ons_price = request.add_ons_price if request.add_ons_price is not None else add_ons_total(request.add_ons)
        total_price = request.total_price
        if total_price is None:
            total_price = (base_price + add_ons_price) * quantity
        return {
            "id": document.allocate_id(),
            "productId": request.product_id,
            "quantity": quantity,
            "selectedOptions": request.selected_options,
            "optionsPricing": request.options_pricing,
            "productOptions": request.product_options,
            "productOptionsPriceModifier": modifier,
            "attachments": request.attachments,
            "addOns": request.add_ons,
            "basePrice": base_price,
            "addOnsPrice": add_ons_price,
            "totalPrice": total_price,
            "product": {
                "id": product.get("id", request.product_id),
                "name": product.get("name") or request.product_name or DEFAULT_PRODUCT_NAME,
                "price": price,
                "originalPrice": product.get("originalPrice"),
                "mainImage": product.get("mainImage") or request.image or self.placeholder,
                "isAvailable": product.get("isAvailable", True),
                "productType": product.get("productType") or "",
            },
        }

    def _find(self, document: CartDocument, item_id: int) -> dict[str, Any]:
        for item in document.items:
            if int(item.get("id") or 0) == item_id:
                return item
        raise EntityNotFoundError(f"Cart item {item_id} not found")

    def update_quantity(self, user: UserKey, item_id: int, quantity: Optional[int]) -> list[dict[str, Any]]:
        document = self.repository.read(user)
        item = self._find(document, item_id)
        if quantity is not None:
            if quantity < 1:
                raise ValueError("quantity must be at least 1")
            item["quantity"] = quantity
            _recompute_total(item)
        self.repository.write(user, document)
        return document.items

    def update_options(self, user: UserKey, update: CartOptionsUpdate) -> list[dict[str, Any]]:
        document = self.repository.read(user)
        targets = [self._find(document, update.item_id)] if update.item_id else list(document.items)
        for item in targets:
            if update.selected_options is not None:
                item["selectedOptions"] = update.selected_options
            if update.options_pricing is not None:
                item["optionsPricing"] = update.options_pricing
            if update.product_options is not None:
                item["productOptions"] = update.product_options
            if update.product_options_price_modifier is not None:
                previous = _number(item.get("productOptionsPriceModifier"))
                item["productOptionsPriceModifier"] = update.product_options_price_modifier
                if item.get("basePrice") is not None:
                    item["basePrice"] = _number(item["basePrice"]) - previous + update.product_options_price_modifier
                    _recompute_total(item)
        self.repository.write(user, document)
        return document.items

    def remove(self, user: UserKey, item_id: int) -> list[dict[str, Any]]:
        document = self.repository.read(user)
        item = self._find(document, item_id)
        document.items = [line for line in document.items if line is not item]
        self.repository.write(user, document)
        return document.items

    def clear(self, user: UserKey) -> list[dict[str, Any]]:
        document = self.repository.read(user)
        document.items = []
        self.repository.write(user, document)
        return []


__all__ = ["CartService", "add_ons_total"]
