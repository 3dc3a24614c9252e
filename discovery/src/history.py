"""検索履歴モジュール.

履歴は新しい順・重複なし・最大 10 件。
ストアは JSON 配列文字列として固定キーに保存する。
"""

from __future__ import annotations

import json
import logging

from src.config import MAX_SEARCH_HISTORY, SEARCH_HISTORY_KEY
from src.storage import JsonFileStorage

logger = logging.getLogger(__name__)


def add_to_search_history(
    history: list[str], term: str, limit: int = MAX_SEARCH_HISTORY
) -> list[str]:
    """term を先頭に追加した新しい履歴を返す.

    既存の同じ語は取り除いて先頭へ移動する。空の語なら履歴はそのまま。
    """
    trimmed = term.strip()
    if not trimmed:
        return list(history)
    return [trimmed, *(h for h in history if h != trimmed)][:limit]


class SearchHistoryStore:
    """検索履歴の読み込み・追加・全削除."""

    def __init__(self, storage: JsonFileStorage, key: str = SEARCH_HISTORY_KEY) -> None:
        self._storage = storage
        self._key = key
        self._history: list[str] = []

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def load(self) -> list[str]:
        """ストアから履歴を読み込む. 壊れた値は履歴なしとして扱う."""
        raw = self._storage.get_item(self._key)
        self._history = _decode(raw, self._key)
        return self.history

    def add(self, term: str) -> list[str]:
        updated = add_to_search_history(self._history, term)
        if updated != self._history:
            self._storage.set_item(self._key, json.dumps(updated, ensure_ascii=False))
            self._history = updated
        return self.history

    def clear(self) -> None:
        self._history = []
        self._storage.remove_item(self._key)


def _decode(raw: str | None, key: str) -> list[str]:
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        logger.warning("検索履歴のパースに失敗。空として扱う: key=%s, error=%s", key, e)
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        logger.warning("検索履歴の形式が不正。空として扱う: key=%s", key)
        return []
    return value[:MAX_SEARCH_HISTORY]
