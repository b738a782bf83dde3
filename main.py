#!/usr/bin/env python3
"""
スプレッドシート連動 時報スピーカー

Googleシートに書かれた「時刻・メッセージ」を定期的に確認し、時刻になった予定を
Google Homeスピーカーで読み上げるエントリーポイント。
予定一覧のJSON公開、メッセージ列の空白整形、Groqへの問い合わせも同じ入口から実行できる。
"""

import argparse
import signal
import sys
import time
from typing import List, Optional

from announcer.config import Config
from announcer.google_sheets import GoogleSheetsManager
from announcer.llm_client import call_groq
from announcer.logger import get_logger
from announcer.message_cleaner import refresh_message_text
from announcer.scheduler import AnnouncementScheduler, process_scheduled_tasks
from announcer.speaker_client import SpeakerClient
from announcer.task_matcher import tasks_to_json
from announcer.web import create_app

logger = get_logger(__name__)


class AnnouncerApp:
    """シート・スピーカー・スケジューラーをまとめるアプリケーション層"""

    def __init__(self, sheets: Optional[GoogleSheetsManager] = None,
                 speaker: Optional[SpeakerClient] = None) -> None:
        self.sheets = sheets or GoogleSheetsManager()
        self.speaker = speaker or SpeakerClient()
        self.scheduler: Optional[AnnouncementScheduler] = None

    def run_forever(self) -> None:
        """定期実行を開始し、停止シグナルまで待機する"""
        self.scheduler = AnnouncementScheduler(self.sheets, self.speaker)
        self.scheduler.start()

        def handle_stop(signum, frame) -> None:
            raise KeyboardInterrupt

        signal.signal(signal.SIGTERM, handle_stop)

        print(f"🔔 読み上げチェックを開始しました（{self.scheduler.interval_seconds}秒ごと）")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            print("\n👋 ユーザー操作により終了しました")
        finally:
            self.scheduler.stop()

    def run_once(self) -> int:
        results = process_scheduled_tasks(self.sheets, self.speaker)
        for result in results:
            print(f"🔊 ({result.status_code}) {result.message}")
        return len(results)

    def refresh(self) -> int:
        rows = self.sheets.get_rows()
        updated_rows, cleaned = refresh_message_text(rows)
        self.sheets.set_rows(updated_rows)
        print(f"✏️ {len(cleaned)}件のメッセージを整形しました")
        return len(cleaned)

    def export(self) -> str:
        return tasks_to_json(self.sheets.get_rows())

    def serve(self, host: str, port: int) -> None:
        app = create_app(self.sheets)
        logger.info(f"予定一覧JSONを公開します: http://{host}:{port}/")
        app.run(host=host, port=port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="スプレッドシート連動 時報スピーカー")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("run", help="定期的に読み上げチェックを実行")
    sub.add_parser("once", help="読み上げチェックを1回だけ実行")
    sub.add_parser("refresh", help="メッセージ列の空白を取り除いて書き戻す")
    sub.add_parser("export", help="有効な予定をJSONで出力")

    serve = sub.add_parser("serve", help="予定一覧をHTTPでJSON公開")
    serve.add_argument("--host", default=Config.HTTP_HOST)
    serve.add_argument("--port", type=int, default=Config.HTTP_PORT)

    ask = sub.add_parser("ask", help="Groqにプロンプトを送信")
    ask.add_argument("prompt")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "ask":
        print(call_groq(args.prompt))
        return 0

    if not Config.validate_config():
        print("❌ 設定に問題があります。.env を確認してください。")
        return 1

    app = AnnouncerApp()
    if not app.sheets.is_available():
        print("❌ Googleシートに接続できませんでした")
        return 1

    if args.command == "run":
        app.run_forever()
    elif args.command == "once":
        app.run_once()
    elif args.command == "refresh":
        app.refresh()
    elif args.command == "export":
        print(app.export())
    elif args.command == "serve":
        app.serve(args.host, args.port)

    return 0


if __name__ == "__main__":
    sys.exit(main())
