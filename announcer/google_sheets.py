"""
Googleシート連携モジュール
読み上げ予定（時刻・メッセージ）が書かれたシートの読み書き
"""

import os
from datetime import datetime, timedelta
from typing import Any, List, Optional

import gspread
from google.auth.exceptions import DefaultCredentialsError
from google.oauth2.service_account import Credentials
from gspread.utils import DateTimeOption, ValueInputOption, ValueRenderOption, rowcol_to_a1

from .config import Config
from .logger import get_logger
from .task_matcher import MESSAGE_COLUMN, TIME_COLUMN

logger = get_logger(__name__)

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive'
]

# Googleスプレッドシートのシリアル値の起点
SHEETS_EPOCH = datetime(1899, 12, 30)


def serial_to_datetime(serial: float) -> datetime:
    """シリアル値（日単位）を naive な datetime に変換（ミリ秒に丸める）"""
    return SHEETS_EPOCH + timedelta(milliseconds=round(serial * 86400000))


def convert_time_cell(value: Any) -> Any:
    """時刻列のセルを datetime に変換。数値以外はそのまま返す"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return serial_to_datetime(value)


def convert_rows(values: List[List[Any]]) -> List[List[Any]]:
    rows = []
    for row in values:
        row = list(row)
        if len(row) > TIME_COLUMN:
            row[TIME_COLUMN] = convert_time_cell(row[TIME_COLUMN])
        rows.append(row)
    return rows


class GoogleSheetsManager:
    """Googleシート管理クラス"""

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        worksheet_name: Optional[str] = None,
        credentials_path: Optional[str] = None,
        worksheet=None,
    ):
        self.client = None
        self.spreadsheet = None
        self.worksheet = worksheet
        self.credentials_path = credentials_path or Config.GOOGLE_CREDENTIALS_PATH
        self.spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else Config.GOOGLE_SPREADSHEET_ID
        self.worksheet_name = worksheet_name if worksheet_name is not None else Config.GOOGLE_WORKSHEET_NAME

        if self.worksheet is None:
            self._initialize_client()

    def _initialize_client(self):
        """Google Sheetsクライアントの初期化"""
        try:
            if not os.path.exists(self.credentials_path):
                logger.warning(f"Google サービスアカウント認証ファイルが見つかりません: {self.credentials_path}")
                logger.info("Google Sheets連携を有効にするには、サービスアカウントのJSONファイルを配置してください")
                return

            # 認証情報の読み込み
            credentials = Credentials.from_service_account_file(
                self.credentials_path,
                scopes=SCOPES
            )

            self.client = gspread.authorize(credentials)

            if self.spreadsheet_id:
                self._initialize_spreadsheet()
            else:
                logger.warning("GOOGLE_SPREADSHEET_ID が設定されていません")

        except DefaultCredentialsError as e:
            logger.error(f"Google認証エラー: {e}")
        except Exception as e:  # noqa: BLE001
            logger.error(f"Google Sheetsクライアント初期化エラー: {e}")

    def _initialize_spreadsheet(self):
        """スプレッドシートとワークシートの初期化"""
        try:
            self.spreadsheet = self.client.open_by_key(self.spreadsheet_id)

            if self.worksheet_name:
                self.worksheet = self.spreadsheet.worksheet(self.worksheet_name)
            else:
                self.worksheet = self.spreadsheet.sheet1

            logger.info(f"Google Sheets連携が初期化されました: {self.spreadsheet.title}")

        except gspread.exceptions.SpreadsheetNotFound:
            logger.error(f"スプレッドシートが見つかりません: {self.spreadsheet_id}")
        except gspread.exceptions.WorksheetNotFound:
            logger.error(f"ワークシートが見つかりません: {self.worksheet_name}")
        except Exception as e:  # noqa: BLE001
            logger.error(f"スプレッドシート初期化エラー: {e}")

    def is_available(self) -> bool:
        """Google Sheets機能が利用可能かチェック"""
        return self.worksheet is not None

    def _require_worksheet(self):
        if not self.is_available():
            raise RuntimeError("Google Sheets機能が利用できません")
        return self.worksheet

    def get_rows(self) -> List[List[Any]]:
        """データ範囲の全行を取得（時刻列は datetime に変換）"""
        worksheet = self._require_worksheet()
        values = worksheet.get_all_values(
            value_render_option=ValueRenderOption.unformatted,
            date_time_render_option=DateTimeOption.serial_number,
        )
        return convert_rows(values)

    def set_rows(self, rows: List[List[Any]]):
        """
        メッセージ列（B列）だけを書き戻す

        時刻列や3列目以降は読み込んだセルのまま残すため書き込まない。
        値は RAW で書き込み、文字列が数値や日付に変換されないようにする。
        """
        worksheet = self._require_worksheet()
        if not rows:
            return

        values = [
            [row[MESSAGE_COLUMN] if len(row) > MESSAGE_COLUMN else '']
            for row in rows
        ]
        column = MESSAGE_COLUMN + 1
        range_name = f"{rowcol_to_a1(1, column)}:{rowcol_to_a1(len(values), column)}"
        worksheet.update(
            range_name=range_name,
            values=values,
            value_input_option=ValueInputOption.raw,
        )
        logger.info(f"Google Sheetsのメッセージ列を{len(values)}行書き戻しました")
