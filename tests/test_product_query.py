from decimal import Decimal

from catalog_api.models import Product
from catalog_api.services.product_query import (
    ProductSearchCriteria,
    fetch_product_page,
    resolve_sort,
    search_words,
)


def _names(products):
    return [product.name for product in products]


def test_search_words_split_on_any_whitespace():
    assert search_words("  red \t shirt\n") == ["red", "shirt"]
    assert search_words("   ") == []
    assert search_words(None) == []


def test_resolve_sort_accepts_known_keys_case_insensitively():
    assert resolve_sort("PRICE", "DESC") == (Product.price, True)
    assert resolve_sort("createdDate", None) == (Product.created_date, False)
    assert resolve_sort("stock_quantity", "asc") == (Product.stock_quantity, False)
    assert resolve_sort("name", "sideways") == (Product.name, False)


def test_resolve_sort_defaults_to_newest_first():
    assert resolve_sort(None, None) == (Product.created_date, True)
    assert resolve_sort("color", "asc") == (Product.created_date, True)


def test_default_search_returns_active_products_newest_first(db_session, make_category, make_product):
    category = make_category()
    make_product(category, "oldest")
    make_product(category, "hidden", is_active=False)
    make_product(category, "middle")
    make_product(category, "newest")

    total, products = fetch_product_page(db_session, ProductSearchCriteria())

    assert total == 3
    assert _names(products) == ["newest", "middle", "oldest"]
    assert all(product.is_active for product in products)


def test_every_search_word_must_appear_somewhere(db_session, make_category, make_product):
    category = make_category()
    make_product(category, "Red Shirt")
    make_product(category, "Shirt", description="Deep RED cotton")
    make_product(category, "Red hat")
    make_product(category, "Blue shirt")

    total, products = fetch_product_page(db_session, ProductSearchCriteria(search_term="shirt red"))

    assert total == 2
    assert sorted(_names(products)) == ["Red Shirt", "Shirt"]


def test_search_treats_like_wildcards_literally(db_session, make_category, make_product):
    category = make_category()
    make_product(category, "100% wool")
    make_product(category, "1000 pieces")

    total, products = fetch_product_page(db_session, ProductSearchCriteria(search_term="100%"))

    assert total == 1
    assert _names(products) == ["100% wool"]


def test_category_price_and_stock_filters_combine(db_session, make_category, make_product):
    tools = make_category("Tools")
    toys = make_category("Toys")
    make_product(tools, "cheap", price="5.00")
    make_product(tools, "low edge", price="10.00")
    make_product(tools, "high edge", price="20.00", stock_quantity=0)
    make_product(tools, "expensive", price="20.01")
    make_product(toys, "other category", price="15.00")

    total, products = fetch_product_page(
        db_session,
        ProductSearchCriteria(
            category_id=tools.id,
            min_price=Decimal("10"),
            max_price=Decimal("20"),
            sort_by="price",
        ),
    )
    assert total == 2
    assert _names(products) == ["low edge", "high edge"]

    total, products = fetch_product_page(
        db_session,
        ProductSearchCriteria(category_id=tools.id, in_stock=False),
    )
    assert total == 1
    assert _names(products) == ["high edge"]

    total, _ = fetch_product_page(db_session, ProductSearchCriteria(in_stock=True))
    assert total == 4


def test_equal_sort_keys_break_ties_by_id(db_session, make_category, make_product):
    category = make_category()
    first = make_product(category, "a", price="7.00")
    second = make_product(category, "b", price="7.00")
    third = make_product(category, "c", price="7.00")

    _, ascending = fetch_product_page(db_session, ProductSearchCriteria(sort_by="price"))
    _, descending = fetch_product_page(db_session, ProductSearchCriteria(sort_by="price", sort_order="desc"))

    assert [p.id for p in ascending] == [first.id, second.id, third.id]
    assert [p.id for p in descending] == [third.id, second.id, first.id]


def test_pagination_counts_before_slicing(db_session, make_category, make_product):
    category = make_category()
    for index in range(5):
        make_product(category, f"item {index}", stock_quantity=index)

    total, page_two = fetch_product_page(
        db_session,
        ProductSearchCriteria(sort_by="stockQuantity", page=2, page_size=2),
    )
    assert total == 5
    assert _names(page_two) == ["item 2", "item 3"]

    total, beyond = fetch_product_page(db_session, ProductSearchCriteria(page=9, page_size=2))
    assert total == 5
    assert beyond == []


def test_page_items_have_category_loaded(db_session, make_category, make_product):
    category = make_category("Garden")
    make_product(category, "Rake")
    db_session.expire_all()

    _, products = fetch_product_page(db_session, ProductSearchCriteria())

    assert products[0].category.name == "Garden"
