"""カート計算モジュール.

カートは CartItem のリストとして扱い、更新系は新しいリストを返す。
"""

from __future__ import annotations

from datetime import datetime, timezone

from src.models import CartItem, Product


def line_total(item: CartItem) -> float:
    return item.product.price * item.quantity


def cart_summary(items: list[CartItem]) -> tuple[int, float]:
    """(合計点数, 合計金額) を返す."""
    total_items = sum(item.quantity for item in items)
    total_price = round(sum(line_total(item) for item in items), 2)
    return total_items, total_price


def discount_percent(product: Product) -> int:
    """値引き率（%、四捨五入）. 値引きなしなら 0."""
    if not product.original_price or product.original_price <= product.price:
        return 0
    return round((product.original_price - product.price) / product.original_price * 100)


def add_item(items: list[CartItem], product: Product, quantity: int = 1) -> list[CartItem]:
    """商品を追加する. 同じ商品があれば数量を加算."""
    updated: list[CartItem] = []
    merged = False
    for item in items:
        if item.product.id == product.id:
            updated.append(CartItem(product=item.product, quantity=item.quantity + quantity, added_at=item.added_at))
            merged = True
        else:
            updated.append(item)
    if not merged:
        updated.append(CartItem(
            product=product,
            quantity=quantity,
            added_at=datetime.now(timezone.utc).isoformat(),
        ))
    return updated


def update_quantity(items: list[CartItem], product_id: str, quantity: int) -> list[CartItem]:
    """数量を変更する. 0 以下なら削除.

    Raises:
        KeyError: カートに product_id がない場合
    """
    if not any(item.product.id == product_id for item in items):
        raise KeyError(product_id)
    if quantity <= 0:
        return remove_item(items, product_id)
    return [
        CartItem(product=item.product, quantity=quantity, added_at=item.added_at)
        if item.product.id == product_id else item
        for item in items
    ]


def remove_item(items: list[CartItem], product_id: str) -> list[CartItem]:
    return [item for item in items if item.product.id != product_id]
