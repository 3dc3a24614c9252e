"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Supabase ---
SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_SECRET_KEY: str = os.environ.get("SUPABASE_SECRET_KEY", "")

PRODUCTS_TABLE = "products"
FALLBACK_PRODUCTS_TABLE = "fallback_products"
CATEGORIES_TABLE = "categories"

# --- 永続ストレージ（ブラウザの localStorage 相当） ---
STORAGE_PATH = Path(
    os.environ.get("STOREFRONT_STORAGE_PATH", _PROJECT_ROOT / "discovery" / "storage.json")
)
SEARCH_HISTORY_KEY = "searchHistory"
MAX_SEARCH_HISTORY = 10

# --- 絞り込み ---
DEFAULT_PRICE_RANGE = (0.0, 1000.0)

# --- サジェスト ---
MAX_PRODUCT_SUGGESTIONS = 5

# --- 価格スクレイピング ---
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)
REQUEST_INTERVAL_MIN = 1.0
REQUEST_INTERVAL_MAX = 3.0
REQUEST_TIMEOUT = 15  # 秒

# --- ログ ---
LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_DIR.mkdir(exist_ok=True)
