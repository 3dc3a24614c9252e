"""Supabase データベース操作モジュール.

商品は products テーブルを優先し、空なら fallback_products を参照する。
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from supabase import Client, create_client

from src.config import (
    CATEGORIES_TABLE,
    FALLBACK_PRODUCTS_TABLE,
    PRODUCTS_TABLE,
    SUPABASE_SECRET_KEY,
    SUPABASE_URL,
)
from src.models import Product

logger = logging.getLogger(__name__)

_client: Client | None = None


def _table(name: str):
    """テーブルを参照する. クライアントは初回アクセス時に生成."""
    global _client
    if _client is None:
        _client = create_client(SUPABASE_URL, SUPABASE_SECRET_KEY)
    return _client.table(name)


def row_to_product(row: dict) -> Product:
    """DB の行を Product に変換する. 欠損値は既定値で補う."""
    now = datetime.now(timezone.utc).isoformat()
    original_price = _to_float(row.get("original_price"))
    return Product(
        id=str(row["id"]),
        name=row.get("name") or "Unknown Product",
        description=row.get("description") or "",
        price=_to_float(row.get("price")),
        original_price=original_price or None,
        category=row.get("category") or "General",
        brand=row.get("brand") or "",
        rating=_to_float(row.get("rating")),
        review_count=_to_int(row.get("review_count")),
        in_stock=row.get("in_stock") is not False,
        tags=row.get("tags") or [],
        created_at=row.get("created_at") or now,
        updated_at=row.get("updated_at") or now,
        image=row.get("image") or "",
        external_url=row.get("external_url") or None,
    )


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def fetch_products() -> list[Product]:
    """全商品を取得する. products が空なら fallback_products を使う."""
    resp = _table(PRODUCTS_TABLE).select("*").execute()
    if resp.data:
        logger.info("%s から %d 件取得", PRODUCTS_TABLE, len(resp.data))
        return [row_to_product(row) for row in resp.data]

    logger.info("%s が空のため %s を参照", PRODUCTS_TABLE, FALLBACK_PRODUCTS_TABLE)
    resp = _table(FALLBACK_PRODUCTS_TABLE).select("*").execute()
    return [row_to_product(row) for row in resp.data or []]


def fetch_products_by_category(category: str) -> list[Product]:
    """カテゴリ名が完全一致する商品を取得する."""
    for table in (PRODUCTS_TABLE, FALLBACK_PRODUCTS_TABLE):
        resp = _table(table).select("*").eq("category", category).execute()
        if resp.data:
            return [row_to_product(row) for row in resp.data]
    logger.info("カテゴリ %s の商品なし", category)
    return []


def fetch_categories() -> list[dict]:
    """カテゴリ行を name 順で取得する."""
    resp = _table(CATEGORIES_TABLE).select("*").order("name").execute()
    return resp.data or []


def update_product_fields(product_id: str, fields: dict) -> None:
    """商品の一部カラムを更新する. updated_at は自動で付与.

    Args:
        fields: {"price", "in_stock", "original_price", "name", "image"} の一部
    """
    if not fields:
        return
    payload = {**fields, "updated_at": datetime.now(timezone.utc).isoformat()}
    _table(PRODUCTS_TABLE).update(payload).eq("id", product_id).execute()
    logger.info("products を更新: id=%s, columns=%s", product_id, sorted(fields))
