"""永続キーバリューストア（ブラウザの localStorage 相当）.

JSON オブジェクト 1 ファイルに key -> 文字列 を保存する。
値の中身（JSON かどうか）は呼び出し側が解釈する。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from src.config import STORAGE_PATH

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """JSON ファイルを使った単一書き込み者前提のストア."""

    def __init__(self, path: Path | str = STORAGE_PATH) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> str | None:
        """キーの値を返す. 未保存または文字列以外なら None."""
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            logger.warning("ストレージの値が文字列ではありません: key=%s", key)
            return None
        return value

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("ストレージ読み込み失敗。空として扱う: path=%s, error=%s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("ストレージの形式が不正。空として扱う: path=%s", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
