"""外部ショップ価格の一括更新 — メインエントリーポイント.

処理フロー:
  1. DB から全商品を取得
  2. external_url を持つ商品に絞る
  3. 各商品の外部ショップページから価格・在庫を取得
  4. 変化したカラムを DB に書き戻す
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime

from src.config import LOG_DIR
from src.db import fetch_products
from src.scraper import wait_interval
from src.updater import update_price


def setup_logging() -> None:
    """ロギングの初期設定."""
    log_file = LOG_DIR / f"price_update_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def run() -> None:
    """メイン処理."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("=== 価格更新 開始 ===")
    start_time = time.time()

    products = [p for p in fetch_products() if p.external_url]
    if not products:
        logger.warning("external_url を持つ商品がありません。終了します。")
        return

    logger.info("対象商品: %d 件", len(products))

    success_count = 0
    for product in products:
        result = update_price(product)
        if result.success:
            success_count += 1
        wait_interval()

    elapsed = time.time() - start_time
    logger.info("=== 価格更新 完了 ===")
    logger.info("成功: %d 件, 失敗: %d 件, 所要時間: %.1f 秒",
                success_count, len(products) - success_count, elapsed)


if __name__ == "__main__":
    run()
