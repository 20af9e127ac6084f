from storefront.services.query_engine import QueryOptions, field_equals, paginate, query


def _comments(count: int) -> list[dict]:
    return [
        {
            "id": idx,
            "userName": f"user-{idx:02d}",
            "content": "great" if idx % 2 else "fine",
            "rating": idx % 5,
            "createdAt": f"2024-01-{idx:02d}T10:00:00.000Z",
        }
        for idx in range(1, count + 1)
    ]


def test_second_page_of_twenty_five_results() -> None:
    items = _comments(25)
    result = query(items, QueryOptions(sort_by="createdAt", sort_order="asc", page=2, page_size=10))

    assert [item["id"] for item in result.items] == list(range(11, 21))
    assert result.total == 25
    assert result.total_pages == 3
    assert result.has_next is True
    assert result.has_prev is True


def test_pages_partition_the_filtered_set() -> None:
    items = _comments(23)
    options = QueryOptions(search="GREAT", search_fields=("content",), sort_by="rating", sort_order="desc")
    everything = query(items, options).items

    collected = []
    for page in range(1, 5):
        options.page = page
        options.page_size = 4
        collected.extend(query(items, options).items)

    assert collected == everything
    assert all(item["content"] == "great" for item in everything)


def test_sort_is_stable_in_both_directions() -> None:
    items = [
        {"id": 1, "rating": 5},
        {"id": 2, "rating": 3},
        {"id": 3, "rating": 5},
        {"id": 4},
    ]
    ascending = query(items, QueryOptions(sort_by="rating", sort_order="asc")).items
    descending = query(items, QueryOptions(sort_by="rating", sort_order="desc")).items

    assert [item["id"] for item in ascending] == [4, 2, 1, 3]
    assert [item["id"] for item in descending] == [1, 3, 2, 4]


def test_string_sort_is_case_insensitive() -> None:
    items = [{"userName": "bob"}, {"userName": "Alice"}, {"userName": "carol"}]
    result = query(items, QueryOptions(sort_by="userName"))
    assert [item["userName"] for item in result.items] == ["Alice", "bob", "carol"]


def test_filters_are_combined_with_and() -> None:
    items = [
        {"id": 1, "productId": 7, "userName": "a"},
        {"id": 2, "productId": 8, "userName": "b"},
        {"id": 3, "productId": 7, "userName": "c"},
    ]
    options = QueryOptions(filters=[field_equals("productId", 7), lambda item: item["userName"] != "c"])
    assert [item["id"] for item in query(items, options).items] == [1]


def test_out_of_range_page_and_clamping() -> None:
    items = list(range(5))
    beyond = paginate(items, page=4, page_size=2)
    assert beyond.items == []
    assert beyond.total_pages == 3
    assert beyond.has_next is False
    assert beyond.has_prev is True

    clamped = paginate(items, page=0, page_size=2)
    assert clamped.page == 1
    assert clamped.items == [0, 1]


def test_non_positive_page_size_returns_everything() -> None:
    result = paginate(list(range(7)), page=1, page_size=0)
    assert result.items == list(range(7))
    assert result.total_pages == 1
    assert result.has_next is False


def test_empty_input_reports_one_page() -> None:
    result = query([], QueryOptions(page_size=10))
    assert result.total == 0
    assert result.total_pages == 1
    assert result.to_dict("comments") == {
        "comments": [],
        "total": 0,
        "page": 1,
        "totalPages": 1,
        "hasNext": False,
        "hasPrev": False,
    }
