"""
スピーカー連携モジュール
Google Homeスピーカー中継APIにメッセージを送って読み上げさせる
"""

from typing import Optional
from urllib.parse import quote

import requests

from .config import Config
from .logger import get_logger

logger = get_logger(__name__)

# encodeURIComponent と同じくエスケープしない記号
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_message(message: str) -> str:
    """メッセージをURLの末尾に付けられる形にパーセントエンコード"""
    return quote(message, safe=URI_COMPONENT_SAFE)


class SpeakerClient:
    """スピーカー中継APIクライアント"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url or Config.SPEAKER_API_URL
        self.timeout = timeout if timeout is not None else Config.SPEAKER_TIMEOUT
        self.session = session or requests.Session()

    def build_url(self, message: str) -> str:
        return self.api_url + encode_message(message)

    def speak(self, message: str) -> requests.Response:
        """
        メッセージを読み上げさせる

        2xx以外のステータスでも例外にはせず、そのままレスポンスを返す。
        接続エラーなどは requests.RequestException として呼び出し元に伝わる。
        """
        url = self.build_url(message)
        logger.debug(f"スピーカーAPI呼び出し: {url}")
        return self.session.get(url, timeout=self.timeout)


def call_speaker_api(message: str) -> requests.Response:
    return SpeakerClient().speak(message)
