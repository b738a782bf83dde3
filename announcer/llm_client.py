"""
Groq API連携モジュール
OpenAI互換エンドポイント経由でプロンプトを送信する
"""

from typing import Optional

import openai

from .config import Config
from .logger import get_logger

logger = get_logger(__name__)


class GroqClient:
    """Groq チャット補完クライアント"""

    def __init__(self, client: Optional[openai.OpenAI] = None):
        self.client = client or openai.OpenAI(
            api_key=Config.GROQ_API_KEY,
            base_url=Config.GROQ_API_URL,
        )
        self.model = Config.GROQ_MODEL
        self.temperature = Config.GROQ_TEMPERATURE

    def ask(self, prompt: str) -> str:
        """プロンプトを送り応答テキストを返す。失敗時は 'Error: ...' を返す"""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
            return response.choices[0].message.content
        except Exception as e:  # noqa: BLE001
            logger.error(f"Groq API呼び出しエラー: {e}")
            return f"Error: {e}"


def call_groq(prompt: str) -> str:
    try:
        client = GroqClient()
    except Exception as e:  # noqa: BLE001
        logger.error(f"Groqクライアント初期化エラー: {e}")
        return f"Error: {e}"
    return client.ask(prompt)
