"""
設定管理モジュール
環境変数とアプリケーション設定を管理
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# .envファイルを読み込み
load_dotenv()


class Config:
    """アプリケーション設定クラス"""

    # プロジェクトのルートディレクトリ
    PROJECT_ROOT = Path(__file__).parent.parent

    # スピーカー中継API設定
    SPEAKER_API_URL: str = os.getenv(
        "SPEAKER_API_URL",
        "http://a.ze.gs/google-home-speaker-wrapper/-h/192.168.1.22/-v/60/-s/",
    )
    SPEAKER_TIMEOUT: float = float(os.getenv("SPEAKER_TIMEOUT", "10"))

    # 許容する時刻のずれ（35秒）
    THRESHOLD_MS: int = int(os.getenv("THRESHOLD_MS", str(35 * 1000)))

    # 定期実行の間隔（秒）。THRESHOLD_MS より短くすること
    CHECK_INTERVAL_SECONDS: int = int(os.getenv("CHECK_INTERVAL_SECONDS", "30"))

    # Google Sheets設定
    GOOGLE_SPREADSHEET_ID: str = os.getenv("GOOGLE_SPREADSHEET_ID", "")
    GOOGLE_WORKSHEET_NAME: str = os.getenv("GOOGLE_WORKSHEET_NAME", "")
    GOOGLE_CREDENTIALS_PATH: str = os.getenv(
        "GOOGLE_CREDENTIALS_PATH",
        str(PROJECT_ROOT / "credentials" / "google_service_account.json"),
    )

    # Groq API設定
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    GROQ_API_URL: str = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    GROQ_TEMPERATURE: float = float(os.getenv("GROQ_TEMPERATURE", "0.7"))

    # JSON公開用HTTPサーバー設定
    HTTP_HOST: str = os.getenv("HTTP_HOST", "127.0.0.1")
    HTTP_PORT: int = int(os.getenv("HTTP_PORT", "8080"))

    # ログ設定
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", str(PROJECT_ROOT / "logs" / "app.log"))

    @classmethod
    def validate_config(cls) -> bool:
        """設定の検証"""
        errors = []

        if not cls.GOOGLE_SPREADSHEET_ID:
            errors.append("GOOGLE_SPREADSHEET_ID が設定されていません")

        if not os.path.exists(cls.GOOGLE_CREDENTIALS_PATH):
            errors.append(
                f"サービスアカウント認証ファイルが見つかりません: {cls.GOOGLE_CREDENTIALS_PATH}"
            )

        if cls.CHECK_INTERVAL_SECONDS * 1000 >= cls.THRESHOLD_MS:
            errors.append("CHECK_INTERVAL_SECONDS は THRESHOLD_MS より短くしてください")

        # 必要なディレクトリの作成
        os.makedirs(Path(cls.LOG_FILE).parent, exist_ok=True)

        if errors:
            for error in errors:
                print(f"設定エラー: {error}")
            return False

        return True

    @classmethod
    def print_config(cls):
        """現在の設定を表示（機密情報は隠す）"""
        print("=== アプリケーション設定 ===")
        print(f"プロジェクトルート: {cls.PROJECT_ROOT}")
        print(f"スピーカーAPI: {cls.SPEAKER_API_URL}")
        print(f"許容誤差: {cls.THRESHOLD_MS}ms")
        print(f"実行間隔: {cls.CHECK_INTERVAL_SECONDS}秒")
        print(f"スプレッドシート: {'設定済み' if cls.GOOGLE_SPREADSHEET_ID else '未設定'}")
        print(f"ワークシート: {cls.GOOGLE_WORKSHEET_NAME or '(先頭シート)'}")
        print(f"Groq API Key: {'設定済み' if cls.GROQ_API_KEY else '未設定'}")
        print(f"ログファイル: {cls.LOG_FILE}")
        print()


# 設定の初期検証
if __name__ == "__main__":
    Config.print_config()
    if Config.validate_config():
        print("✅ 設定は正常です")
    else:
        print("❌ 設定に問題があります")
