"""外部ショップ価格による商品情報の更新."""

from __future__ import annotations

import logging

from src.db import update_product_fields
from src.models import PriceUpdateResult, Product, ScrapedInfo
from src.scraper import scrape_product_info

logger = logging.getLogger(__name__)


def build_update(product: Product, info: ScrapedInfo) -> dict:
    """取得結果から更新するカラムを組み立てる.

    価格・在庫は常に更新し、値引き前価格・商品名・画像は変化があるときだけ含める。
    """
    fields: dict = {"price": info.price, "in_stock": info.in_stock}
    if info.original_price:
        fields["original_price"] = info.original_price
    if info.name and info.name != product.name:
        fields["name"] = info.name
    if info.image and info.image != product.image:
        fields["image"] = info.image
    return fields


def update_price(product: Product) -> PriceUpdateResult:
    """1 商品の価格を外部ショップから取得して DB に反映する."""
    if not product.external_url:
        return _failed(product, "external_url が未設定")

    info = scrape_product_info(product.external_url)
    if info is None:
        return _failed(product, f"価格を取得できません: {product.external_url}")

    try:
        update_product_fields(product.id, build_update(product, info))
    except Exception as e:
        logger.error("DB 更新失敗: id=%s, error=%s", product.id, e)
        return _failed(product, f"DB 更新に失敗しました: {e}")

    logger.info("価格更新: %s %s → %s", product.name, product.price, info.price)
    return PriceUpdateResult(
        product_id=product.id,
        product_name=product.name,
        success=True,
        old_price=product.price,
        new_price=info.price,
        message=f"価格更新成功: {product.price:,.0f} → {info.price:,.0f}",
    )


def _failed(product: Product, message: str) -> PriceUpdateResult:
    logger.warning("価格更新失敗: id=%s, %s", product.id, message)
    return PriceUpdateResult(
        product_id=product.id,
        product_name=product.name,
        success=False,
        old_price=product.price,
        new_price=product.price,
        message=message,
    )
