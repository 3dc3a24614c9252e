"""検索サジェスト生成モジュール.

候補の挿入順（先に入ったものが上位、重複は後から来た方を捨てる）:
  1. 入力文字列そのもの
  2. 接頭辞予測テーブル（長い接頭辞から順に全て参照）
  3. 商品名・ブランド・カテゴリ（先頭 5 商品まで）
  4. よく検索される語
"""

from __future__ import annotations

from src.config import MAX_PRODUCT_SUGGESTIONS
from src.models import Product

# 小文字の接頭辞 (1〜3 文字) -> 予測語
PREDICTION_TABLE: dict[str, list[str]] = {
    "a": ["Apple", "AirPods", "Apple Watch", "Android", "Amazon Echo"],
    "ai": ["AirPods", "AirPods Pro", "AirPods Max"],
    "air": ["AirPods", "AirPods Pro", "AirPods Max", "MacBook Air", "iPad Air", "Air Fryer"],
    "ap": ["Apple", "Apple Watch", "Apple TV"],
    "app": ["Apple", "Apple Watch", "Apple TV", "Apple Pencil"],
    "c": ["Camera", "Canon", "Chromebook", "Coffee Maker"],
    "ca": ["Camera", "Canon", "Canon EOS"],
    "d": ["Dell", "Dell XPS", "Dyson", "DJI Drone"],
    "de": ["Dell", "Dell XPS", "Desktop"],
    "g": ["Galaxy", "Google Pixel", "Gaming Laptop", "GoPro"],
    "ga": ["Galaxy", "Galaxy S24", "Galaxy Tab", "Gaming Laptop", "Gaming Chair"],
    "gal": ["Galaxy", "Galaxy S24", "Galaxy Tab", "Galaxy Watch", "Galaxy Buds"],
    "h": ["Headphones", "HP", "HP Pavilion", "Huawei"],
    "he": ["Headphones", "Headset"],
    "i": ["iPhone", "iPad", "iMac", "iPhone 15", "iPad Pro"],
    "ip": ["iPhone", "iPhone 15", "iPhone 15 Pro", "iPad", "iPad Pro", "iPad Air"],
    "iph": ["iPhone", "iPhone 15", "iPhone 15 Pro", "iPhone 15 Pro Max", "iPhone 14"],
    "ipa": ["iPad", "iPad Pro", "iPad Air", "iPad mini"],
    "l": ["Laptop", "Lenovo", "LG", "Logitech"],
    "la": ["Laptop", "Laptop Stand", "Laptop Bag"],
    "m": ["MacBook", "MacBook Pro", "MacBook Air", "Monitor", "Mouse"],
    "ma": ["MacBook", "MacBook Pro", "MacBook Air", "Mac mini"],
    "mac": ["MacBook", "MacBook Pro", "MacBook Air", "Mac mini", "Mac Studio"],
    "n": ["Nintendo Switch", "Nikon", "Nike"],
    "ni": ["Nintendo Switch", "Nikon", "Nike"],
    "p": ["PlayStation 5", "Pixel", "PS5", "Printer"],
    "pl": ["PlayStation 5", "PlayStation Portal"],
    "ps": ["PS5", "PS5 Controller"],
    "s": ["Samsung", "Samsung Galaxy", "Sony", "Smart Watch", "Speaker"],
    "sa": ["Samsung", "Samsung Galaxy", "Samsung TV"],
    "sam": ["Samsung", "Samsung Galaxy", "Samsung Galaxy S24", "Samsung TV", "Samsung Monitor"],
    "so": ["Sony", "Sony WH-1000XM5", "Sony TV"],
    "t": ["Tablet", "TV", "Tripod"],
    "tv": ["TV", "TV Stand"],
    "x": ["Xbox", "Xbox Series X", "Xiaomi"],
    "xb": ["Xbox", "Xbox Series X", "Xbox Controller"],
}

COMMON_TERMS: list[str] = [
    "iPhone",
    "Samsung Galaxy",
    "MacBook",
    "iPad",
    "AirPods",
    "Apple Watch",
    "PlayStation 5",
    "Nintendo Switch",
    "Xbox",
    "Laptop",
    "Headphones",
    "Smart TV",
    "Camera",
    "Gaming Chair",
    "Smartwatch",
    "Bluetooth Speaker",
    "Tablet",
]


def get_suggestions(
    query: str,
    products: list[Product],
    prediction_table: dict[str, list[str]] | None = None,
    common_terms: list[str] | None = None,
) -> list[str]:
    """入力途中の文字列から重複なしのサジェスト一覧を返す.

    Args:
        query: 入力中の文字列
        products: メモリ上の商品一覧（変更しない）
        prediction_table: 接頭辞予測テーブル。省略時は PREDICTION_TABLE
        common_terms: よく検索される語。省略時は COMMON_TERMS

    Returns:
        挿入順のサジェスト。空入力なら空リスト。
    """
    trimmed = query.strip()
    if not trimmed:
        return []

    table = PREDICTION_TABLE if prediction_table is None else prediction_table
    terms = COMMON_TERMS if common_terms is None else common_terms
    needle = trimmed.lower()

    # dict はキーの挿入順を保つので順序付き集合として使う
    suggestions: dict[str, None] = {trimmed: None}

    for length in range(len(needle), 0, -1):
        for term in table.get(needle[:length], []):
            if needle in term.lower():
                suggestions.setdefault(term, None)

    for product in _matching_products(products, needle)[:MAX_PRODUCT_SUGGESTIONS]:
        suggestions.setdefault(product.name, None)
        if product.brand:
            suggestions.setdefault(product.brand, None)
        if product.category:
            suggestions.setdefault(product.category, None)

    for term in terms:
        if needle in term.lower():
            suggestions.setdefault(term, None)

    return list(suggestions)


def _matching_products(products: list[Product], needle: str) -> list[Product]:
    """name / category / brand のいずれかに needle を含む商品（配列順）."""
    return [
        p for p in products
        if needle in p.name.lower()
        or needle in (p.category or "").lower()
        or needle in (p.brand or "").lower()
    ]
