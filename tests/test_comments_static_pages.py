import asyncio

import pytest

from storefront.exceptions import EntityNotFoundError
from storefront.schemas.requests import CommentCreate, StaticPageCreate
from storefront.services.overlay import CommentRepository
from storefront.services.static_pages import unique_slug


def _seed_comments(backend, count: int) -> None:
    comments = [
        {
            "id": idx,
            "productId": 1001 if idx % 2 else 1004,
            "userName": f"User {idx:02d}",
            "content": "Great print quality" if idx % 3 == 0 else "Fast delivery",
            "rating": idx % 5 + 1,
            "createdAt": f"2024-02-{idx:02d}T08:00:00.000Z",
        }
        for idx in range(1, count + 1)
    ]
    CommentRepository(backend.overlay).write(comments)


def test_comment_listing_defaults_to_newest_first(backend) -> None:
    _seed_comments(backend, 25)

    result = backend.comments.search(page=2)

    assert [item["id"] for item in result.items] == list(range(15, 5, -1))
    assert result.total_pages == 3
    assert result.has_next and result.has_prev


def test_comment_listing_filters_and_searches(backend) -> None:
    _seed_comments(backend, 12)

    by_product = backend.comments.search(product_id=1004, limit=0)
    assert {item["productId"] for item in by_product.items} == {1004}
    assert by_product.total == 6

    searched = backend.comments.search(search="great", sort_by="createdAt", sort_order="asc", limit=0)
    assert [item["id"] for item in searched.items] == [3, 6, 9, 12]

    by_name = backend.comments.search(search="user 1", sort_by="userName", sort_order="asc", limit=0)
    assert [item["userName"] for item in by_name.items] == ["User 10", "User 11", "User 12"]


def test_create_comment_assigns_next_id_and_enriches(backend) -> None:
    _seed_comments(backend, 3)
    payload = CommentCreate.model_validate(
        {"productId": 1001, "userId": "15", "userName": "Huda", "content": "Lovely", "rating": 5}
    )

    created = asyncio.run(backend.comments.create(payload))

    assert created["id"] == 4
    assert created["userId"] == 15
    assert created["productName"] == "Business Cards"
    assert created["productImage"] == "/assets/products/1001.svg"
    assert created["createdAt"] == created["updatedAt"]
    assert created["createdAt"].endswith("Z")
    assert backend.comments.for_product(1001)[-1]["id"] == 4


def test_create_comment_defaults(backend) -> None:
    created = asyncio.run(backend.comments.create(CommentCreate()))

    assert created["id"] == 1
    assert created["userName"] == "Guest"
    assert created["userId"] == 0
    assert "rating" not in created
    assert "productName" not in created


def test_update_and_delete_comment(backend) -> None:
    _seed_comments(backend, 2)

    updated = backend.comments.update(2, {"content": "Edited", "id": 99})
    assert updated["id"] == 2
    assert updated["content"] == "Edited"
    assert backend.comments.get(2)["content"] == "Edited"

    backend.comments.delete(2)
    with pytest.raises(EntityNotFoundError):
        backend.comments.get(2)
    with pytest.raises(EntityNotFoundError):
        backend.comments.update(2, {"content": "x"})
    with pytest.raises(EntityNotFoundError):
        backend.comments.delete(2)


def test_static_pages_come_from_seed_until_first_write(backend) -> None:
    pages = asyncio.run(backend.static_pages.list())
    assert [page["slug"] for page in pages] == ["about-us", "return-policy"]
    assert pages[1]["title_ar"] == "سياسة الاسترجاع"
    assert "description_en" not in pages[0]

    created = asyncio.run(backend.static_pages.create(StaticPageCreate(title="Terms of Service")))
    assert created["id"] == 3
    assert created["slug"] == "terms-of-service"
    assert created["isActive"] is True
    assert created["showInFooter"] is False

    stored = backend.static_pages.repository.read()
    assert [page["id"] for page in stored] == [1, 2, 3]


def test_derived_page_slugs_do_not_collide(backend) -> None:
    first = asyncio.run(backend.static_pages.create(StaticPageCreate(title="FAQ")))
    second = asyncio.run(backend.static_pages.create(StaticPageCreate(title="faq")))
    explicit = asyncio.run(backend.static_pages.create(StaticPageCreate(title="Other", slug="faq")))

    assert first["slug"] == "faq"
    assert second["slug"] == "faq-2"
    assert explicit["slug"] == "faq"
    assert asyncio.run(backend.static_pages.get_by_slug("faq"))["id"] == first["id"]


def test_update_keeps_slug_unless_given(backend) -> None:
    updated = asyncio.run(backend.static_pages.update(1, {"title": "Who we are", "slug": ""}))
    assert updated["slug"] == "about-us"
    assert updated["title"] == "Who we are"

    asyncio.run(backend.static_pages.delete(1))
    with pytest.raises(EntityNotFoundError):
        asyncio.run(backend.static_pages.get(1))


def test_unique_slug() -> None:
    assert unique_slug("about", set()) == "about"
    assert unique_slug("about", {"about", "about-2"}) == "about-3"
    assert unique_slug("", set()) == "page"
    assert unique_slug("", {"page"}) == "page-2"
    assert unique_slug("", {"page", "page-2"}) == "page-3"


def test_non_numeric_product_filter_matches_nothing(backend) -> None:
    _seed_comments(backend, 4)

    assert backend.comments.search(product_id="abc", limit=0).items == []
    assert backend.comments.search(product_id="1004", limit=0).total == 2
    assert backend.comments.search(product_id="", limit=0).total == 4
