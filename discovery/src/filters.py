"""商品の絞り込み・並び替えモジュール.

絞り込みは以下の条件の AND:
  1. カテゴリ（完全一致）
  2. フリーワード（name / brand / description の部分一致）
  3. 価格帯（両端を含む）
  4. ブランド
  5. 評価（選択した星のいずれか以上）
  6. 在庫あり
  7. セール中（値引き前価格 > 現在価格）
その後、指定の並び順で安定ソートする。
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from src.config import DEFAULT_PRICE_RANGE
from src.models import FacetBounds, FacetSelection, Product, SortKey

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

# 秒の小数部（Postgres は 1〜6 桁で返す）
_FRACTION = re.compile(r"\.(\d{1,6})(?=[+-]|$)")
# 時刻の後ろの UTC オフセット（+09 / +0900 / +09:00）
_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d{6})?)?)([+-]\d{2}):?(\d{2})?$")


def filter_and_sort(products: list[Product], facets: FacetSelection) -> list[Product]:
    """絞り込み条件に合う商品を並び替えて返す. 入力リストは変更しない."""
    matched = [p for p in products if _matches(p, facets)]
    return sort_products(matched, facets.sort_key)


def _matches(product: Product, facets: FacetSelection) -> bool:
    if facets.category and product.category != facets.category:
        return False
    if not matches_search(product, facets.search_term):
        return False
    low, high = facets.price_range
    if not low <= product.price <= high:
        return False
    if facets.selected_brands and (not product.brand or product.brand not in facets.selected_brands):
        return False
    if not matches_ratings(product, facets.selected_ratings):
        return False
    if facets.in_stock_only and not product.in_stock:
        return False
    if facets.on_sale_only and not is_on_sale(product):
        return False
    return True


def is_on_sale(product: Product) -> bool:
    return bool(product.original_price) and product.original_price > product.price


def matches_search(product: Product, term: str) -> bool:
    """name / brand / description のいずれかに検索語を含むか（大文字小文字無視）."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in product.name.lower()
        or needle in (product.brand or "").lower()
        or needle in (product.description or "").lower()
    )


def matches_ratings(product: Product, selected_ratings: set[int]) -> bool:
    """選択した星のいずれかについて floor(rating) >= 星 なら通す.

    複数選択は OR 扱いなので、選択を増やしても結果は狭まらない。
    """
    if not selected_ratings:
        return True
    stars = math.floor(product.rating)
    return any(stars >= r for r in selected_ratings)


def sort_products(products: list[Product], sort_key: SortKey | str) -> list[Product]:
    """並び順に従ってソートする. 同順位は元の順序を保つ."""
    key = SortKey(sort_key)
    if key is SortKey.PRICE_LOW:
        return sorted(products, key=lambda p: p.price)
    if key is SortKey.PRICE_HIGH:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if key is SortKey.RATING:
        return sorted(products, key=lambda p: p.rating, reverse=True)
    if key is SortKey.NEWEST:
        return sorted(products, key=lambda p: _parse_timestamp(p.created_at), reverse=True)
    if key is SortKey.NAME:
        return sorted(products, key=lambda p: (p.name.casefold(), p.name))
    return list(products)


def _parse_timestamp(value: str) -> datetime:
    """ISO 8601 文字列を aware な datetime にする. 解析できなければ最古扱い."""
    if not value:
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(_normalize_iso(value))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _normalize_iso(value: str) -> str:
    """Python 3.10 の fromisoformat が読める形に揃える.

    "Z" を "+00:00" に、小数秒を 6 桁に、オフセットを "+HH:MM" にする。
    """
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1).ljust(6, "0"), text)
    return _OFFSET.sub(lambda m: f"{m.group(1)}{m.group(2)}:{m.group(3) or '00'}", text)


def category_subset(products: list[Product], category: str | None) -> list[Product]:
    """選択中カテゴリの全商品（他の条件を適用する前）を返す."""
    if not category:
        return list(products)
    return [p for p in products if p.category == category]


def facet_bounds(products: list[Product], category: str | None = None) -> FacetBounds:
    """カテゴリ内の全商品からブランド・評価・価格帯の候補を導出する.

    絞り込み後ではなくカテゴリ単位で求めるため、現在の条件外の選択肢も表示できる。
    """
    subset = category_subset(products, category)

    brands = sorted({p.brand for p in subset if p.brand})
    ratings = sorted({math.floor(p.rating) for p in subset}, reverse=True)

    if subset:
        prices = [p.price for p in subset]
        price_range = (min(prices), max(prices))
    else:
        price_range = DEFAULT_PRICE_RANGE

    return FacetBounds(brands=brands, ratings=ratings, price_range=price_range)
