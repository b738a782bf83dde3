"""
スケジューラーと読み上げ処理
シートを定期的に確認し、時刻になった予定をスピーカーで読み上げる
"""

import time
from dataclasses import dataclass
from datetime import datetime
from threading import Thread
from typing import Dict, List, Optional

import requests
import schedule

from .config import Config
from .logger import AnnouncementLogger, get_logger
from .task_matcher import select_due_tasks
from .time_announcement import build_speaking_message

logger = get_logger(__name__)


@dataclass
class AnnouncementResult:
    """読み上げ1件分の結果"""
    message: str
    status_code: int
    body: str


def process_scheduled_tasks(
    rows_source,
    speaker,
    now: Optional[datetime] = None,
    threshold_ms: Optional[float] = None,
    announcement_logger: Optional[AnnouncementLogger] = None,
) -> List[AnnouncementResult]:
    """
    シートを読み込み、閾値内の予定を読み上げる

    rows_source は get_rows()、speaker は speak(message) を持つオブジェクト。
    1件の通信エラーはログに残して次の行へ進む（再試行はしない）。
    """
    now = now or datetime.now()
    threshold_ms = Config.THRESHOLD_MS if threshold_ms is None else threshold_ms
    announcement_logger = announcement_logger or AnnouncementLogger()

    rows = rows_source.get_rows()
    results: List[AnnouncementResult] = []

    for task in select_due_tasks(rows, now, threshold_ms, announcement_logger):
        message = build_speaking_message(task.target_time, task.message_text)
        try:
            response = speaker.speak(message)
        except requests.RequestException as e:
            announcement_logger.log_speaker_error(message, e)
            continue

        announcement_logger.log_response(response.status_code, response.text, message)
        results.append(AnnouncementResult(
            message=message,
            status_code=response.status_code,
            body=response.text,
        ))

    return results


class AnnouncementScheduler:
    """読み上げ処理の定期実行スケジューラー"""

    def __init__(self, rows_source, speaker, interval_seconds: Optional[int] = None):
        self.rows_source = rows_source
        self.speaker = speaker
        self.interval_seconds = interval_seconds or Config.CHECK_INTERVAL_SECONDS
        self.scheduler = schedule.Scheduler()
        self.running = False
        self.scheduler_thread: Optional[Thread] = None
        self.last_executed: Optional[str] = None
        self.last_announced = 0

        self.scheduler.every(self.interval_seconds).seconds.do(self.run_once)
        logger.info(f"読み上げチェックを{self.interval_seconds}秒ごとに登録しました")

    def run_once(self) -> List[AnnouncementResult]:
        """読み上げ処理を1回実行"""
        try:
            results = process_scheduled_tasks(self.rows_source, self.speaker)
        except Exception as e:  # noqa: BLE001 - ループを止めない
            logger.error(f"読み上げ処理エラー: {e}")
            results = []

        self.last_executed = datetime.now().isoformat()
        self.last_announced = len(results)
        return results

    def start(self):
        """スケジューラーを開始"""
        if self.running:
            logger.warning("スケジューラーは既に実行中です")
            return

        self.running = True
        self.scheduler_thread = Thread(target=self._run_scheduler, daemon=True)
        self.scheduler_thread.start()

        logger.info("スケジューラー開始")

    def stop(self):
        """スケジューラーを停止"""
        self.running = False
        if self.scheduler_thread:
            self.scheduler_thread.join(timeout=2)

        logger.info("スケジューラー停止")

    def _run_scheduler(self):
        """スケジューラーのメインループ"""
        while self.running:
            self.scheduler.run_pending()
            time.sleep(1)

    def get_status(self) -> Dict:
        """スケジュール状況を取得"""
        next_run = self.scheduler.next_run
        return {
            "running": self.running,
            "interval_seconds": self.interval_seconds,
            "last_executed": self.last_executed,
            "last_announced": self.last_announced,
            "next_run": next_run.isoformat() if next_run else None,
        }
