"""
ログ管理モジュール
アプリケーション全体のログを統一管理
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Config

# ログフォーマット
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """ロガーのセットアップ"""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = level or Config.LOG_LEVEL
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        log_file_path = Path(Config.LOG_FILE)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"ログファイルの設定に失敗しました: {exc}")

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return setup_logger(name)


class AnnouncementLogger:
    """時報・読み上げ専用のロガークラス"""

    def __init__(self, name: str = "announcement"):
        self.logger = get_logger(name)

    def log_response(self, status_code: int, body: str, message: str):
        self.logger.info(f"Response ({status_code}): {body} : {message}")

    def log_speaker_error(self, message: str, error: Exception):
        self.logger.error(f"[SPEAKER ERROR] {message}: {error}")

    def log_cleaned_text(self, text: str):
        self.logger.info(text)

    def log_skipped_row(self, index: int, reason: str):
        self.logger.debug(f"[SKIP] 行{index + 1}: {reason}")
