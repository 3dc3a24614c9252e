"""カテゴリナビゲーションモジュール.

カテゴリ / サブカテゴリは kind で判別する NavigationItem として扱う。
"""

from __future__ import annotations

import re
from collections import Counter

from src.models import Category, NavigationItem, Product, Subcategory


def _category(id_: str, name: str, description: str, subs: list[tuple[str, str, str]]) -> Category:
    return Category(
        id=id_,
        name=name,
        slug=id_,
        description=description,
        subcategories=[
            Subcategory(id=sid, name=sname, slug=sslug, parent_id=id_)
            for sid, sname, sslug in subs
        ],
    )


CATEGORIES: list[Category] = [
    _category("electronics", "Electronics", "Latest gadgets, smartphones, laptops, and electronic devices", [
        ("smartphones", "Smartphones", "smartphones"),
        ("tablets", "Tablets", "tablets"),
        ("smartwatches", "Smartwatches", "smartwatches"),
        ("headphones", "Headphones", "headphones"),
        ("speakers", "Speakers", "speakers"),
        ("cameras", "Cameras", "cameras"),
        ("tvs", "TVs & Home Theater", "tvs-home-theater"),
    ]),
    _category("computers-laptops", "Computers & Laptops", "Desktop computers, laptops, tablets, and accessories", [
        ("laptops", "Laptops", "laptops"),
        ("desktops", "Desktop Computers", "desktop-computers"),
        ("monitors", "Monitors", "monitors"),
        ("keyboards", "Keyboards", "keyboards"),
        ("mice", "Mice", "mice"),
        ("storage", "Storage", "storage"),
    ]),
    _category("smartphones", "Smartphones", "Latest smartphones, mobile phones, and accessories", [
        ("iphone", "iPhone", "iphone"),
        ("samsung", "Samsung", "samsung"),
        ("google-pixel", "Google Pixel", "google-pixel"),
        ("phone-cases", "Phone Cases", "phone-cases"),
        ("chargers", "Chargers", "chargers"),
    ]),
    _category("gaming", "Gaming", "Gaming consoles, games, accessories, and gaming gear", [
        ("gaming-consoles", "Gaming Consoles", "gaming-consoles"),
        ("video-games", "Video Games", "video-games"),
        ("gaming-chairs", "Gaming Chairs", "gaming-chairs"),
        ("gaming-headsets", "Gaming Headsets", "gaming-headsets"),
    ]),
    _category("home-appliances", "Home Appliances", "Kitchen appliances, home electronics, and smart home devices", [
        ("kitchen-appliances", "Kitchen Appliances", "kitchen-appliances"),
        ("coffee-makers", "Coffee Makers", "coffee-makers"),
        ("smart-home", "Smart Home", "smart-home"),
        ("air-purifiers", "Air Purifiers", "air-purifiers"),
    ]),
    _category("fashion", "Fashion & Clothing", "Men's and women's clothing, shoes, accessories, and jewelry", [
        ("shoes", "Shoes", "shoes"),
        ("bags-purses", "Bags & Purses", "bags-purses"),
        ("jewelry", "Jewelry", "jewelry"),
        ("watches", "Watches", "watches"),
    ]),
]


def slugify(text: str) -> str:
    """カテゴリ名を id 形式にする (例: "Home Appliances" -> "home-appliances")."""
    return re.sub(r"\s+", "-", text.strip().lower())


def find_by_slug(slug: str, categories: list[Category] = CATEGORIES) -> NavigationItem | None:
    """slug からカテゴリを探す. トップレベルを優先し、なければサブカテゴリ."""
    for category in categories:
        if category.slug == slug:
            return category
    for category in categories:
        for sub in category.subcategories:
            if sub.slug == slug:
                return sub
    return None


def breadcrumb(item: NavigationItem, categories: list[Category] = CATEGORIES) -> list[NavigationItem]:
    """ルートから item までのパンくずを返す."""
    if item.kind == "category":
        return [item]
    parent = next((c for c in categories if c.id == item.parent_id), None)
    if parent is None:
        return [item]
    return [parent, item]


def products_for_item(products: list[Product], item: NavigationItem) -> list[Product]:
    """カテゴリページに表示する商品.

    商品カテゴリの slug が item.id と一致するか、カテゴリ名・タグに item 名を含むもの。
    """
    name = item.name.lower()
    return [
        p for p in products
        if slugify(p.category or "") == item.id
        or name in (p.category or "").lower()
        or any(name in tag.lower() for tag in p.tags)
    ]


def category_product_counts(
    products: list[Product], categories: list[Category] = CATEGORIES
) -> dict[str, int]:
    """カテゴリ id ごとの商品数. 該当なしのカテゴリは 0."""
    counts = Counter(slugify(p.category) if p.category else "other" for p in products)
    return {c.id: counts.get(c.id, 0) for c in categories}
