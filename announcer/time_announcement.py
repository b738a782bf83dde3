"""
時報メッセージモジュール
予定時刻から読み上げ用の文章を組み立てる
"""

from datetime import datetime
from typing import Any


def format_hour(hour: int) -> int:
    """24時間表記を12時間表記に変換（0時・12時は12）"""
    return hour % 12 or 12


def format_minute(minute: int) -> str:
    if minute == 0:
        return "ちょうど"
    return f"{minute}分"


def build_speaking_message(time: datetime, text: Any) -> str:
    """読み上げメッセージを生成"""
    return f"{format_hour(time.hour)}時{format_minute(time.minute)}です。{text}"
