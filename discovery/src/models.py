"""データモデル定義."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union


@dataclass
class Product:
    """商品を表す. 絞り込み・サジェスト処理の間は変更しない."""

    id: str
    name: str
    description: str = ""
    price: float = 0.0
    original_price: float | None = None  # 値引き前価格
    category: str = ""
    brand: str = ""  # 空文字あり
    rating: float = 0.0  # 0〜5
    review_count: int = 0
    in_stock: bool = True
    tags: list[str] = field(default_factory=list)
    created_at: str = ""  # ISO 8601
    updated_at: str = ""  # ISO 8601
    image: str = ""
    external_url: str | None = None  # 価格更新元の外部ショップ URL


class SortKey(str, Enum):
    """商品一覧の並び順."""

    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"
    NAME = "name"


@dataclass
class FacetSelection:
    """絞り込み条件. UI 操作のたびに作り直す値オブジェクト."""

    category: str | None = None
    search_term: str = ""
    price_range: tuple[float, float] = (0.0, 1000.0)
    selected_brands: set[str] = field(default_factory=set)
    selected_ratings: set[int] = field(default_factory=set)  # 各値は「その星以上」
    in_stock_only: bool = False
    on_sale_only: bool = False  # 値引き前価格が現在価格より高いもののみ
    sort_key: SortKey = SortKey.FEATURED


@dataclass
class FacetBounds:
    """カテゴリ内の全商品から導出する絞り込み候補."""

    brands: list[str]
    ratings: list[int]
    price_range: tuple[float, float]


@dataclass
class Subcategory:
    """サブカテゴリ."""

    id: str
    name: str
    slug: str
    parent_id: str
    kind: Literal["subcategory"] = "subcategory"


@dataclass
class Category:
    """トップレベルのカテゴリ."""

    id: str
    name: str
    slug: str
    description: str = ""
    subcategories: list[Subcategory] = field(default_factory=list)
    kind: Literal["category"] = "category"


NavigationItem = Union[Category, Subcategory]


@dataclass
class CartItem:
    """カート内の1行."""

    product: Product
    quantity: int
    added_at: str  # ISO 8601


@dataclass
class ScrapedInfo:
    """外部ショップから取得した商品情報."""

    price: float
    in_stock: bool
    original_price: float | None = None
    name: str | None = None
    image: str | None = None


@dataclass
class PriceUpdateResult:
    """価格更新1件分の結果."""

    product_id: str
    product_name: str
    success: bool
    old_price: float
    new_price: float
    message: str
