import asyncio

import pytest

from storefront.events.types import EventType
from storefront.exceptions import EntityNotFoundError
from storefront.schemas.requests import CartAddRequest, CartOptionsUpdate
from storefront.services.overlay import UserKey


def _add(backend, user: str, **body):
    return asyncio.run(backend.cart.add(UserKey(user), CartAddRequest.model_validate(body)))


def test_adding_same_product_twice_merges_quantities(backend) -> None:
    _add(backend, "7", productId=1003, quantity=2)
    items = _add(backend, "7", productId=1003, quantity=1)

    assert len(items) == 1
    assert items[0]["productId"] == 1003
    assert items[0]["quantity"] == 3
    assert backend.cart.list(UserKey("7")) == items


def test_new_line_snapshots_product_and_prices(backend) -> None:
    items = _add(
        backend,
        "1",
        productId=1001,
        quantity=2,
        productOptionsPriceModifier=10,
        addOns=[{"name": "Rounded corners", "price": 5}, {"name": "Box", "price": 15}],
    )
    line = items[0]

    assert line["id"] == 1
    assert line["basePrice"] == 130
    assert line["addOnsPrice"] == 20
    assert line["totalPrice"] == 300
    assert line["product"]["name"] == "Business Cards"
    assert line["product"]["mainImage"] == "/assets/products/1001.svg"
    assert line["product"]["originalPrice"] == 150


def test_supplied_prices_are_kept(backend) -> None:
    items = _add(backend, "1", productId=1004, basePrice=700, addOnsPrice=0, totalPrice=700)
    assert items[0]["basePrice"] == 700
    assert items[0]["totalPrice"] == 700


def test_unknown_product_uses_request_fallbacks(backend) -> None:
    items = _add(backend, "2", productId=42, productName="Custom job", price=99, image="/images/custom.png")
    product = items[0]["product"]

    assert product["name"] == "Custom job"
    assert product["price"] == 99
    assert product["mainImage"] == "/images/custom.png"
    assert product["isAvailable"] is True


def test_quantity_update_remove_and_id_reuse(backend) -> None:
    user = UserKey("3")
    _add(backend, "3", productId=1001)
    _add(backend, "3", productId=1006)

    updated = backend.cart.update_quantity(user, 2, 4)
    assert [line["quantity"] for line in updated] == [1, 4]
    assert updated[1]["totalPrice"] == 360

    remaining = backend.cart.remove(user, 2)
    assert [line["productId"] for line in remaining] == [1001]

    items = _add(backend, "3", productId=1004)
    assert [line["id"] for line in items] == [1, 3]

    with pytest.raises(EntityNotFoundError):
        backend.cart.remove(user, 2)
    with pytest.raises(ValueError):
        backend.cart.update_quantity(user, 1, 0)


def test_update_options_targets_one_line(backend) -> None:
    user = UserKey("4")
    _add(backend, "4", productId=1001)
    _add(backend, "4", productId=1006)

    items = backend.cart.update_options(
        user,
        CartOptionsUpdate.model_validate({"itemId": 2, "selectedOptions": {"size": "A4"}, "productOptionsPriceModifier": 15}),
    )

    assert items[0]["selectedOptions"] == {}
    assert items[1]["selectedOptions"] == {"size": "A4"}
    assert items[1]["basePrice"] == 105
    assert items[1]["totalPrice"] == 105


def test_cart_mutations_emit_and_clear(backend) -> None:
    seen = []
    backend.emitter.subscribe(seen.append, EventType.CART_UPDATED)
    _add(backend, "5", productId=1001)
    assert backend.cart.clear(UserKey("5")) == []

    assert len(seen) == 2
    assert backend.cart.list(UserKey("5")) == []


def test_wishlist_add_is_idempotent(backend) -> None:
    user = UserKey("9")
    backend.wishlist.add(user, 1001)
    once = backend.wishlist.list(user)
    backend.wishlist.add(user, 1001)

    assert backend.wishlist.list(user) == once == [{"id": 1001, "productId": 1001}]
    assert backend.wishlist.contains(user, 1001)
    assert not backend.wishlist.contains(user, 1002)


def test_wishlist_remove_clear_and_events(backend) -> None:
    user = UserKey("9")
    seen = []
    backend.emitter.subscribe(seen.append)
    backend.wishlist.add(user, 1001)
    backend.wishlist.add(user, 1002)

    assert backend.wishlist.remove(user, 1001) == [{"id": 1002, "productId": 1002}]
    assert backend.wishlist.clear(user) == []
    assert [event.type for event in seen] == [
        EventType.WISHLIST_UPDATED,
        EventType.WISHLIST_UPDATED,
        EventType.WISHLIST_UPDATED,
        EventType.WISHLIST_UPDATED,
        EventType.WISHLIST_CLEARED,
    ]


def test_wishlist_requires_product_id(backend) -> None:
    with pytest.raises(ValueError):
        backend.wishlist.add(UserKey("9"), None)
