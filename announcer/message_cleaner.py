"""
メッセージ整形モジュール
メッセージ列の空白（全角スペースを含む）を取り除く
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from .logger import AnnouncementLogger
from .task_matcher import split_row

# JavaScript の /\s/ と同じ文字集合（全角スペース U+3000 と BOM U+FEFF を含む）
WHITESPACE_PATTERN = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
)


def clean_message_text(text: str) -> str:
    return WHITESPACE_PATTERN.sub("", text)


def _clean_row(row: Sequence[Any]) -> Tuple[List[Any], Optional[str]]:
    scheduled_time, message_text, rest = split_row(row)
    if not isinstance(message_text, str):
        return list(row), None

    cleaned = clean_message_text(message_text)
    if cleaned == "":
        # セルを空にしない
        return list(row), None

    return [scheduled_time, cleaned, *rest], cleaned


def normalize_row(
    row: Sequence[Any],
    announcement_logger: Optional[AnnouncementLogger] = None,
) -> List[Any]:
    """
    行のメッセージ列から空白を除去した新しい行を返す

    メッセージが文字列でない場合や、空白を除くと空になる場合は元の行と
    同じ値を返す。3列目以降は位置も含めてそのまま残す。
    """
    new_row, cleaned = _clean_row(row)
    if cleaned is not None and announcement_logger:
        announcement_logger.log_cleaned_text(cleaned)
    return new_row


def refresh_message_text(
    rows: Sequence[Sequence[Any]],
    announcement_logger: Optional[AnnouncementLogger] = None,
) -> Tuple[List[List[Any]], List[str]]:
    """全行を整形し、(更新後の行, 整形したメッセージ一覧) を返す"""
    announcement_logger = announcement_logger or AnnouncementLogger()
    updated_rows = []
    cleaned_texts = []

    for row in rows:
        new_row, cleaned = _clean_row(row)
        if cleaned is not None:
            announcement_logger.log_cleaned_text(cleaned)
            cleaned_texts.append(cleaned)
        updated_rows.append(new_row)

    return updated_rows, cleaned_texts
