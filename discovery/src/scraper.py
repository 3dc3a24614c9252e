"""外部ショップの商品ページから価格を取得するモジュール.

ベストエフォートで、リトライはしない。
失敗時はログを出して None を返す。
"""

from __future__ import annotations

import logging
import random
import re
import time
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from src.config import (
    REQUEST_INTERVAL_MAX,
    REQUEST_INTERVAL_MIN,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from src.models import ScrapedInfo

logger = logging.getLogger(__name__)

# ドメイン -> CSS セレクタ
SUPPORTED_SITES: dict[str, dict[str, str]] = {
    "shopee.vn": {
        "price": "[data-sqe='link'] ._1w9jLI",
        "name": ".ie3A\\+n.bM\\+7UW.Cve6sh",
        "image": ".qJTAj9 img",
        "stock": ".product-not-available",
    },
    "tiki.vn": {
        "price": ".final-price",
        "name": ".title h1",
        "image": ".product-image img",
        "stock": ".product-not-available",
    },
    "lazada.vn": {
        "price": ".pdp-price_type_normal",
        "name": ".pdp-mod-product-badge-title",
        "image": ".gallery-preview-panel__image img",
        "stock": ".pdp-mod-product-badge-title",
    },
    "amazon.com": {
        "price": ".a-price-whole",
        "name": "#productTitle",
        "image": "#landingImage",
        "stock": "#availability",
    },
}

_ORIGINAL_PRICE_SELECTORS = ".original-price, .list-price"

_OUT_OF_STOCK_MARKERS = ("hết hàng", "out of stock", "unavailable")


def get_domain(url: str) -> str:
    """URL から www. を除いたホスト名を返す. 解析できなければ空文字."""
    host = urlparse(url).hostname or ""
    return host.removeprefix("www.")


def parse_price(text: str) -> float:
    """価格表記を数値にする.

    "1,234,567" / "1.234.567" / "1234.56" / "₫1.234.567" などに対応。
    解析できなければ 0.0。
    """
    clean = re.sub(r"[^\d.,]", "", text or "")
    if not clean:
        return 0.0
    if "," in clean:
        clean = clean.replace(",", "")
    elif clean.count(".") > 1:
        # 1.234.567 形式（区切り文字としてのドット）
        clean = clean.replace(".", "")
    try:
        return float(clean)
    except ValueError:
        return 0.0


def check_in_stock(soup: BeautifulSoup, selectors: dict[str, str]) -> bool:
    """在庫表示に品切れの文言がなければ在庫ありとみなす."""
    selector = selectors.get("stock")
    if not selector:
        return True
    element = soup.select_one(selector)
    if element is None:
        return True
    text = element.get_text(strip=True).lower()
    return not any(marker in text for marker in _OUT_OF_STOCK_MARKERS)


def fetch_product_page(url: str) -> str | None:
    """商品ページの HTML を取得する.

    Returns:
        HTML 文字列。失敗時は None。
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    try:
        resp = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.text
    except requests.RequestException as e:
        logger.error("商品ページ取得失敗: url=%s, error=%s", url, e)
        return None


def parse_product_page(html: str, selectors: dict[str, str]) -> ScrapedInfo | None:
    """商品ページ HTML から価格・在庫などを抽出する. 価格が取れなければ None."""
    soup = BeautifulSoup(html, "html.parser")

    price_el = soup.select_one(selectors["price"])
    if price_el is None:
        logger.warning("価格要素が見つかりません: selector=%s", selectors["price"])
        return None

    price = parse_price(price_el.get_text(strip=True))
    if price == 0:
        logger.warning("価格のパースに失敗: text=%s", price_el.get_text(strip=True))
        return None

    original_price: float | None = None
    original_el = soup.select_one(f"{selectors['price']} del, {_ORIGINAL_PRICE_SELECTORS}")
    if original_el is not None:
        parsed = parse_price(original_el.get_text(strip=True))
        if parsed > price:
            original_price = parsed

    name_el = soup.select_one(selectors["name"]) if selectors.get("name") else None
    image_el = soup.select_one(selectors["image"]) if selectors.get("image") else None

    return ScrapedInfo(
        price=price,
        in_stock=check_in_stock(soup, selectors),
        original_price=original_price,
        name=name_el.get_text(strip=True) if name_el else None,
        image=image_el.get("src") if image_el else None,
    )


def scrape_product_info(url: str) -> ScrapedInfo | None:
    """対応ショップの商品ページから情報を取得する."""
    domain = get_domain(url)
    selectors = SUPPORTED_SITES.get(domain)
    if selectors is None:
        logger.warning("未対応のショップ: domain=%s, url=%s", domain, url)
        return None

    html = fetch_product_page(url)
    if html is None:
        return None
    return parse_product_page(html, selectors)


def wait_interval() -> None:
    """リクエスト間隔を 1〜3 秒ランダムで待機する."""
    interval = random.uniform(REQUEST_INTERVAL_MIN, REQUEST_INTERVAL_MAX)
    time.sleep(interval)
