import asyncio
import json

import pytest

from storefront.api.routing import UNHANDLED, RequestRouter, RouteGroup, split_path
from storefront.exceptions import DatasetLoadError
from storefront.schemas.envelope import ListEnvelope


def test_unknown_paths_and_methods_fall_through(call) -> None:
    assert call("orders") is UNHANDLED
    assert call("products", method="PATCH") is UNHANDLED
    assert call("products/abc") is UNHANDLED
    assert call("products/²") is UNHANDLED
    assert call("products/%C2%B2") is UNHANDLED
    assert call("products/١٢") is UNHANDLED
    assert call("") is UNHANDLED
    assert not UNHANDLED


def test_product_list_envelope(call) -> None:
    result = call("/api/products")

    assert isinstance(result, ListEnvelope)
    assert result.success is True
    assert result["products"] == result.data == list(result)
    assert "products" in result and "data" in result and "success" in result
    assert "categories" not in result
    assert result[0] in result
    assert dict(result) == result.to_dict()
    assert result[0]["id"] == 1001
    assert result[0]["mainImage"] == "/assets/products/1001.svg"
    assert result[4]["mainImage"] == "/assets/placeholder.svg"
    assert result[2]["name_ar"] == "ملصقات دائرية"
    assert "name_en" not in result[2]

    payload = result.to_dict()
    assert payload["success"] is True
    assert payload["products"] == payload["data"]


def test_product_search_and_paging(call) -> None:
    result = call("products?search=cards&sortBy=price&sortOrder=desc&page=1&limit=5")
    assert [item["id"] for item in result] == [1001]
    assert result["total"] == 1
    assert result["totalPages"] == 1


def test_single_product_and_not_found(call) -> None:
    assert call("products/1004")["name_en"] == "Logo Design"
    assert call("products/999") == {"success": False, "message": "Product not found"}


def test_products_by_category_and_subcategory(call) -> None:
    assert [item["id"] for item in call("products/category/10")] == [1001, 1002, 1006]
    assert [item["id"] for item in call("products/subcategory/11")] == [1001, 1006]


def test_categories_and_subcategories(call) -> None:
    categories = call("categories")
    assert categories[0]["image"] == "/assets/categories/10.svg"
    assert call("categories/30")["image"] == "/images/categories/marketing.jpg"
    assert [item["id"] for item in call("subcategories")] == [11, 12, 21]
    assert [item["id"] for item in call("subcategories/by-parent/10")] == [11, 12]
    assert call("subcategories/21")["name_ar"] == "ملصقات"
    assert call("subcategories/10")["success"] is False


def test_collections(call) -> None:
    collections = call("collections")
    assert [item["_id"] for item in collections] == ["Best-Sellers", "Affordable-Printing", "featured-picks"]
    assert call("collections/1")["_id"] == "Affordable-Printing"
    assert call("collections/featured-picks")["name"] == "Featured Picks"
    assert call("collections/nope")["success"] is False

    assert [item["id"] for item in call("collections/Best-Sellers/products")] == [1004, 1001]
    assert [item["id"] for item in call("collections/1/products")] == [1001, 1006]
    assert [item["id"] for item in call("collections/featured-picks/products?limit=1")] == [1001]
    assert list(call("collections/missing/products")) == []


def test_cart_routes(call) -> None:
    added = call("user/7/cart", method="POST", body=json.dumps({"productId": 1003, "quantity": 2}))
    assert added["success"] is True
    call("user/7/cart", method="POST", body={"productId": 1003, "quantity": 1})

    listed = call("user/7/cart")
    assert listed["cart"][0]["quantity"] == 3
    assert len(listed) == 1

    item_id = listed[0]["id"]
    assert call(f"user/7/cart/{item_id}", method="PUT", body={"quantity": 5})["cart"][0]["quantity"] == 5
    assert call(f"user/7/cart/{item_id}", method="PUT", body={"quantity": 0})["success"] is False
    assert call("user/7/cart/update-options", method="PUT", body={"selectedOptions": {"finish": "matte"}})[
        "cart"
    ][0]["selectedOptions"] == {"finish": "matte"}
    assert call("user/7/cart/99", method="DELETE") == {"success": False, "message": "Cart item 99 not found"}
    assert call(f"user/7/cart/{item_id}", method="DELETE") == {"success": True, "cart": []}
    assert call("user/7/cart", method="DELETE") == {"success": True, "cart": []}


def test_cart_add_validation_errors(call) -> None:
    assert call("user/7/cart", method="POST", body="{broken")["success"] is False
    assert call("user/7/cart", method="POST", body={"productId": "abc"})["success"] is False


def test_wishlist_routes(call) -> None:
    assert call("user/3/wishlist", method="POST", body={"productId": 1002})["wishlist"] == [
        {"id": 1002, "productId": 1002}
    ]
    assert call("user/3/wishlist/check/1002") == {"exists": True}
    assert call("user/3/wishlist/check/1001") == {"exists": False}
    assert call("user/3/wishlist")["wishlist"] == [{"id": 1002, "productId": 1002}]
    assert call("user/3/wishlist/product/1002", method="DELETE")["wishlist"] == []
    assert call("user/3/wishlist", method="POST", body={}) == {"success": False, "message": "productId is required"}
    assert call("user/3/wishlist", method="DELETE") == {"success": True, "wishlist": []}


def test_comment_routes(call) -> None:
    for idx in range(25):
        call("comments", method="POST", body={"productId": 1001, "userName": f"u{idx}", "content": "ok"})

    assert call("comments?productId=abc")["comments"] == []
    assert call("comments?productId=abc")["total"] == 0
    assert call("comments?productId=&limit=5")["total"] == 25

    page = call("comments?page=2&limit=10&sortOrder=asc")
    assert [item["id"] for item in page["comments"]] == list(range(11, 21))
    assert page["totalPages"] == 3
    assert page["hasNext"] is True
    assert page["hasPrev"] is True

    assert len(call("comments/product/1001")["comments"]) == 25
    assert call("comments/3")["userName"] == "u2"
    assert call("comments/3", method="PUT", body={"content": "edited"})["content"] == "edited"
    assert call("comments/3", method="DELETE") == {"success": True}
    assert call("comments/3") == {"success": False, "message": "Comment not found"}
    assert call("comments/3", method="DELETE")["success"] is False


def test_static_page_routes(call) -> None:
    pages = call("static-pages")
    assert pages["pages"][0]["slug"] == "about-us"

    created = call("static-pages", method="POST", body={"title": "Shipping Info", "showInFooter": True})
    assert created["slug"] == "shipping-info"
    assert call("static-pages/slug/shipping-info")["id"] == created["id"]
    assert call(f"static-pages/{created['id']}", method="PUT", body={"content": "<p>2 days</p>"})["content"] == "<p>2 days</p>"
    assert call("static-pages/slug/missing")["success"] is False

    encoded = call("static-pages", method="POST", body={"title": "Percent", "slug": "a%41"})
    assert call("static-pages/slug/a%2541")["id"] == encoded["id"]
    assert call("static-pages/slug/aA")["success"] is False
    assert call(f"static-pages/{created['id']}", method="DELETE") == {"success": True}
    assert call(f"static-pages/{created['id']}") == {"success": False, "message": "Page not found"}


def test_coupon_validation(call) -> None:
    ok = call("coupons/validate", method="POST", body={"code": " save10 ", "totalAmount": 155})
    assert ok["success"] is True
    assert ok["discountAmount"] == 16
    assert ok["coupon"]["code"] == "SAVE10"

    fixed = call("coupons/validate", method="POST", body={"code": "FLAT50", "totalAmount": 250})
    assert fixed["discountAmount"] == 50

    assert call("coupons/validate", method="POST", body={"code": "FLAT50", "totalAmount": 100}) == {
        "success": False,
        "message": "Order total does not meet the coupon minimum",
    }
    assert call("coupons/validate", method="POST", body={"code": "OLD20", "totalAmount": 100})["success"] is False
    assert call("coupons/validate", method="POST", body="not json")["success"] is False


def test_reference_routes(call) -> None:
    assert len(call("shipping")) == 2
    assert [item["id"] for item in call("banners/active")] == [1, 2]
    assert [item["id"] for item in call("banners/active?position=hero")] == [1]
    assert call("banners/3")["title"] == "Summer Sale"

    assert [item["id"] for item in call("testimonials/active")] == [1, 2]
    assert [item["id"] for item in call("testimonials/featured")] == [1]
    assert call("testimonials/2")["name_ar"] == "محمد العتيبي"
    assert call("testimonials/2", method="DELETE")["success"] is True

    clients = call("clients")
    assert clients[0]["logo"] == "/assets/clients/1.svg"
    assert clients[1]["logo"] == "/images/clients/bayt-al-oud.png"
    assert [item["id"] for item in call("clients/active")] == [1, 2]
    assert [item["id"] for item in call("clients/featured")] == [1, 3]
    assert call("clients/9")["success"] is False

    order = call("checkout", method="POST", body={})
    assert order["success"] is True
    assert order["orderId"].startswith("MOCK-")


def test_dataset_errors_propagate(settings, database, tmp_path) -> None:
    from storefront.backend import build_backend

    settings.data_source = str(tmp_path / "empty")
    backend = build_backend(settings, database=database)

    with pytest.raises(DatasetLoadError):
        asyncio.run(backend.router.request("products"))


def test_literal_routes_win_within_a_group() -> None:
    group = RouteGroup("demo")
    hits: list[str] = []

    @group.get("items/{item_id}")
    async def by_id(context):
        hits.append(f"id:{context.params['item_id']}")
        return {}

    @group.get("items/active")
    async def active(context):
        hits.append("active")
        return {}

    router = RequestRouter(backend=None, groups=[group])
    asyncio.run(router.request("items/active"))
    asyncio.run(router.request("items/caf%C3%A9"))

    assert hits == ["active", "id:café"]


def test_split_path() -> None:
    assert split_path("/api/comments/?page=2&page=3&search=") == ("comments", {"page": "2", "search": ""})
    assert split_path("products") == ("products", {})
