"""filters モジュールのユニットテスト."""

from src.filters import (
    category_subset,
    facet_bounds,
    filter_and_sort,
    is_on_sale,
    matches_ratings,
    sort_products,
)
from src.models import FacetSelection, Product, SortKey


def _product(id_: str, **kwargs) -> Product:
    defaults = {
        "name": f"Product {id_}",
        "price": 100.0,
        "category": "Smartphones",
        "brand": "Brand",
        "rating": 4.0,
        "created_at": "2024-01-01T00:00:00Z",
    }
    defaults.update(kwargs)
    return Product(id=id_, **defaults)


IPHONE = _product(
    "1", name="iPhone 15", brand="Apple", category="Smartphones",
    price=999, rating=4.8, in_stock=True, description="Apple flagship phone",
)
GALAXY = _product(
    "2", name="Samsung Galaxy S24", brand="Samsung", category="Smartphones",
    price=899, rating=4.6, in_stock=False, description="Android phone",
)


def _catalog() -> list[Product]:
    return [
        IPHONE,
        GALAXY,
        _product("3", name="MacBook Air", brand="Apple", category="Laptops",
                 price=1199, rating=4.7, created_at="2024-05-01T00:00:00Z"),
        _product("4", name="Budget Phone", brand="", category="Smartphones",
                 price=150, rating=3.2, created_at="2023-06-01T00:00:00Z"),
        _product("5", name="Pixel 8", brand="Google", category="Smartphones",
                 price=699, rating=4.2, created_at="2024-03-01T00:00:00Z"),
    ]


def _wide(**kwargs) -> FacetSelection:
    return FacetSelection(price_range=(0, 10_000), **kwargs)


class TestFilterAndSort:
    """filter_and_sort のテスト."""

    def test_in_stock_only(self):
        """在庫ありのみで iPhone だけが残ること."""
        result = filter_and_sort([IPHONE, GALAXY], _wide(in_stock_only=True))
        assert result == [IPHONE]

    def test_price_low_sort(self):
        """price-low で安い順になること."""
        result = filter_and_sort([IPHONE, GALAXY], _wide(sort_key=SortKey.PRICE_LOW))
        assert [p.price for p in result] == [899, 999]

    def test_category_exact_match(self):
        result = filter_and_sort(_catalog(), _wide(category="Laptops"))
        assert [p.id for p in result] == ["3"]

    def test_category_is_case_sensitive(self):
        assert filter_and_sort(_catalog(), _wide(category="laptops")) == []

    def test_search_matches_name_brand_description(self):
        """name / brand / description のどれかに含めば通ること."""
        by_brand = filter_and_sort(_catalog(), _wide(search_term="APPLE"))
        assert [p.id for p in by_brand] == ["1", "3"]

        by_description = filter_and_sort(_catalog(), _wide(search_term="android"))
        assert [p.id for p in by_description] == ["2"]

    def test_search_ignores_category(self):
        assert filter_and_sort(_catalog(), _wide(search_term="laptops")) == []

    def test_price_range_inclusive(self):
        result = filter_and_sort(_catalog(), FacetSelection(price_range=(699, 999)))
        assert [p.id for p in result] == ["1", "2", "5"]

    def test_brand_filter_excludes_empty_brand(self):
        result = filter_and_sort(_catalog(), _wide(selected_brands={"Apple", ""}))
        assert [p.id for p in result] == ["1", "3"]

    def test_rating_filter(self):
        result = filter_and_sort(_catalog(), _wide(selected_ratings={4}))
        assert [p.id for p in result] == ["1", "2", "3", "5"]

    def test_on_sale_only(self):
        """値引き前価格が現在価格より高い商品だけが残ること."""
        products = [
            _product("a", price=80, original_price=100),
            _product("b", price=80, original_price=80),
            _product("c", price=80),
            _product("d", price=50, original_price=60, in_stock=False),
        ]
        assert [p.id for p in filter_and_sort(products, _wide(on_sale_only=True))] == ["a", "d"]
        assert [p.id for p in filter_and_sort(products, _wide(on_sale_only=True, in_stock_only=True))] == ["a"]

    def test_empty_products(self):
        assert filter_and_sort([], _wide(search_term="x", in_stock_only=True)) == []

    def test_impossible_combination(self):
        facets = FacetSelection(price_range=(5000, 6000), selected_brands={"Nobody"})
        assert filter_and_sort(_catalog(), facets) == []

    def test_input_not_mutated(self):
        products = _catalog()
        before = list(products)
        filter_and_sort(products, _wide(sort_key=SortKey.PRICE_HIGH))
        assert products == before

    def test_idempotent(self):
        """2 回適用しても結果が変わらないこと."""
        facets = FacetSelection(
            search_term="phone", price_range=(100, 1000),
            selected_ratings={3}, sort_key=SortKey.RATING,
        )
        once = filter_and_sort(_catalog(), facets)
        assert filter_and_sort(once, facets) == once

    def test_price_range_monotonic(self):
        """価格帯を広げても通過済みの商品が消えないこと."""
        narrow = filter_and_sort(_catalog(), FacetSelection(price_range=(600, 1000)))
        wide = filter_and_sort(_catalog(), FacetSelection(price_range=(100, 1200)))
        assert all(p in wide for p in narrow)


class TestMatchesRatings:
    """評価の OR 判定のテスト."""

    def test_single_threshold(self):
        assert matches_ratings(_product("x", rating=4.2), {3})

    def test_multiple_thresholds_are_or(self):
        """{3, 5} でも 4.2 の商品が含まれること."""
        assert matches_ratings(_product("x", rating=4.2), {3, 5})

    def test_below_threshold(self):
        assert not matches_ratings(_product("x", rating=4.9), {5})

    def test_no_selection(self):
        assert matches_ratings(_product("x", rating=0), set())


class TestSortProducts:
    """sort_products のテスト."""

    def test_featured_keeps_order(self):
        products = _catalog()
        assert sort_products(products, SortKey.FEATURED) == products

    def test_price_high(self):
        result = sort_products(_catalog(), SortKey.PRICE_HIGH)
        assert [p.id for p in result] == ["3", "1", "2", "5", "4"]

    def test_rating(self):
        result = sort_products(_catalog(), SortKey.RATING)
        assert [p.id for p in result] == ["1", "3", "2", "5", "4"]

    def test_newest(self):
        result = sort_products(_catalog(), SortKey.NEWEST)
        assert [p.id for p in result][:2] == ["3", "5"]
        assert result[-1].id == "4"

    def test_newest_unparseable_last(self):
        products = [_product("a", created_at="not-a-date"), _product("b")]
        assert [p.id for p in sort_products(products, "newest")] == ["b", "a"]

    def test_newest_postgres_timestamps(self):
        """小数秒が 6 桁未満・オフセットにコロンがない形式も日時として並ぶこと."""
        products = [
            _product("a", created_at="2024-01-01T10:30:00.12345+00:00"),
            _product("b", created_at="2024-03-01T08:00:00.5+0900"),
            _product("c", created_at="2023-12-31T23:59:59.999Z"),
            _product("d", created_at="garbage"),
        ]
        assert [p.id for p in sort_products(products, SortKey.NEWEST)] == ["b", "a", "c", "d"]

    def test_name_case_insensitive(self):
        products = [_product("a", name="banana"), _product("b", name="Apple"), _product("c", name="cherry")]
        assert [p.name for p in sort_products(products, SortKey.NAME)] == ["Apple", "banana", "cherry"]

    def test_stable_ties(self):
        """同価格は元の順序を保つこと."""
        products = [_product("a", price=10), _product("b", price=5), _product("c", price=10)]
        assert [p.id for p in sort_products(products, SortKey.PRICE_HIGH)] == ["a", "c", "b"]
        assert [p.id for p in sort_products(products, SortKey.PRICE_LOW)] == ["b", "a", "c"]


class TestFacetBounds:
    """facet_bounds のテスト."""

    def test_from_category_subset(self):
        bounds = facet_bounds(_catalog(), "Smartphones")
        assert bounds.brands == ["Apple", "Google", "Samsung"]
        assert bounds.ratings == [4, 3]
        assert bounds.price_range == (150, 999)

    def test_ignores_other_facets(self):
        """在庫などの条件に関係なくカテゴリ全体から求めること."""
        bounds = facet_bounds([IPHONE, GALAXY], "Smartphones")
        assert bounds.brands == ["Apple", "Samsung"]

    def test_empty_subset_defaults(self):
        bounds = facet_bounds(_catalog(), "Nothing")
        assert bounds.brands == []
        assert bounds.ratings == []
        assert bounds.price_range == (0.0, 1000.0)

    def test_no_category_uses_all(self):
        assert len(category_subset(_catalog(), None)) == 5


class TestIsOnSale:
    """is_on_sale のテスト."""

    def test_discounted(self):
        assert is_on_sale(_product("x", price=80, original_price=100))

    def test_not_discounted(self):
        assert not is_on_sale(_product("x", price=80))
        assert not is_on_sale(_product("x", price=80, original_price=80))
        assert not is_on_sale(_product("x", price=80, original_price=0))
