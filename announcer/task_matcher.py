"""
予定行の判定モジュール
スプレッドシートの行から「今」読み上げるべき予定を選び出す
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .logger import AnnouncementLogger

TIME_COLUMN = 0
MESSAGE_COLUMN = 1


@dataclass(frozen=True)
class DueTask:
    """読み上げ対象の予定"""
    target_time: datetime
    message_text: Any


def split_row(row: Sequence[Any]):
    """行を (予定時刻, メッセージ, 残りの列) に分解する"""
    scheduled_time = row[TIME_COLUMN] if len(row) > TIME_COLUMN else None
    message_text = row[MESSAGE_COLUMN] if len(row) > MESSAGE_COLUMN else None
    return scheduled_time, message_text, list(row[MESSAGE_COLUMN + 1:])


def is_valid_task(scheduled_time: Any, message_text: Any) -> bool:
    """
    予定時刻が日時型で、メッセージが空でないか

    メッセージの判定は Python の真偽値に従う。空のリスト・辞書や Decimal(0) は偽、
    NaN は真となり JavaScript とは異なるが、シートから読める値には現れないため許容する。
    """
    return isinstance(scheduled_time, datetime) and bool(message_text)


def get_target_time_today(now: datetime, scheduled_time: datetime) -> datetime:
    """
    今日の日付に予定の時・分・秒を合わせた日時を返す

    時・分・秒は now と同じ基準の時計で読む。aware な予定時刻は now のタイムゾーン
    （now が naive ならローカル時刻）に変換する。naive な予定時刻はシート上の
    壁時計の値なので、変換せずそのまま使う。
    """
    if scheduled_time.tzinfo is not None:
        if now.tzinfo is not None:
            scheduled_time = scheduled_time.astimezone(now.tzinfo)
        else:
            scheduled_time = scheduled_time.astimezone()

    return now.replace(
        hour=scheduled_time.hour,
        minute=scheduled_time.minute,
        second=scheduled_time.second,
        microsecond=0,
    )


def is_time_within_threshold(now: datetime, target_time: datetime, threshold_ms: float) -> bool:
    """now と target_time の差が閾値（ミリ秒）以内か"""
    return abs(now - target_time) <= timedelta(milliseconds=threshold_ms)


def select_due_tasks(
    rows: Iterable[Sequence[Any]],
    now: datetime,
    threshold_ms: float,
    announcement_logger: Optional[AnnouncementLogger] = None,
) -> List[DueTask]:
    """閾値内に入っている有効な予定を元の行順で返す"""
    due_tasks: List[DueTask] = []

    for index, row in enumerate(rows):
        scheduled_time, message_text, _ = split_row(row)

        if not is_valid_task(scheduled_time, message_text):
            if announcement_logger:
                announcement_logger.log_skipped_row(index, "invalid")
            continue

        target_time = get_target_time_today(now, scheduled_time)
        if not is_time_within_threshold(now, target_time, threshold_ms):
            if announcement_logger:
                announcement_logger.log_skipped_row(index, "outside threshold")
            continue

        due_tasks.append(DueTask(target_time=target_time, message_text=message_text))

    return due_tasks


def to_iso_string(value: datetime) -> str:
    """UTCのISO-8601文字列（ミリ秒・Z付き）に変換"""
    # naive な日時はローカル時刻として扱われる
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def export_tasks(rows: Iterable[Sequence[Any]]) -> List[Dict[str, Any]]:
    """有効な行を閾値に関係なく公開用の辞書に変換"""
    tasks = []
    for row in rows:
        scheduled_time, message_text, _ = split_row(row)
        if not is_valid_task(scheduled_time, message_text):
            continue
        tasks.append({
            "scheduledTime": to_iso_string(scheduled_time),
            "messageText": message_text,
        })
    return tasks


def tasks_to_json(rows: Iterable[Sequence[Any]]) -> str:
    return json.dumps(export_tasks(rows), ensure_ascii=False, separators=(",", ":"))
