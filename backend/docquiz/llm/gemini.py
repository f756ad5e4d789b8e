"""
Gemini API LLMクライアント（Google Gemini APIとの通信）

【初心者向け】
- Google Gemini APIを使用してLLMを呼び出す
- LLMClientインターフェースを実装（generate）
- PDFはインラインデータ（{"mime_type": "application/pdf", "data": bytes}）として送る
- response_schema を渡すと JSON 出力（application/json）を強制する
"""
import asyncio
import logging
import re
import time
from functools import lru_cache
from typing import Any, Dict

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from docquiz.core.settings import settings
from docquiz.llm.base import Contents, LLMInternalError, LLMTimeoutError

# ロガー設定
logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


def extract_gemini_text(response: Any) -> str:
    """
    Gemini APIレスポンスからテキストを取り出す

    候補が空（安全フィルタでブロックされた等）の場合、response.text は ValueError を投げる。
    呼び出し側では「空応答」として扱えるよう空文字列を返す。

    Args:
        response: generate_content の戻り値

    Returns:
        応答テキスト（取得できなければ空文字列）
    """
    try:
        text = response.text
    except ValueError as e:
        logger.warning(f"Gemini APIの応答にテキストが含まれていません: {e}")
        return ""
    return text or ""


class GeminiClient:
    """
    Gemini APIクライアント

    - google.generativeai を使用してGemini APIを呼び出す
    - LLMClientインターフェースに準拠
    - 1インスタンスを呼び出し側で生成し、各操作に引数で渡して使う
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_sec: int | None = None,
        max_attempts: int | None = None,
    ):
        """
        Geminiクライアントを初期化

        Args:
            api_key: Gemini APIキー（デフォルト: settingsから取得）
            model: 使用するモデル名（デフォルト: settingsから取得）
            timeout_sec: タイムアウト秒数（デフォルト: settingsから取得）
            max_attempts: クォータ制限時の最大試行回数（デフォルト: settingsから取得）
        """
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model or settings.gemini_model
        self.timeout_sec = timeout_sec or settings.gemini_timeout_sec
        self.max_attempts = max_attempts or settings.gemini_max_attempts

        # APIキーを設定
        if not self.api_key:
            raise ValueError("Gemini APIキーが設定されていません。GEMINI_API_KEY環境変数を設定してください。")

        genai.configure(api_key=self.api_key)

        # モデルを取得
        try:
            self.model = genai.GenerativeModel(self.model_name)
        except Exception as e:
            logger.error(f"Geminiモデルの初期化に失敗: {e}")
            raise LLMInternalError(f"Geminiモデルの初期化に失敗しました: {str(e)}") from e

    async def generate(
        self,
        contents: Contents,
        response_schema: Dict[str, Any] | None = None,
    ) -> str:
        """
        Gemini APIに1回問い合わせ、応答テキストを取得

        Args:
            contents: プロンプト文字列、またはインラインデータと指示テキストのリスト
            response_schema: JSON出力スキーマ（指定時は application/json を強制）

        Returns:
            Gemini APIからの応答テキスト（空応答なら空文字列）

        Raises:
            LLMTimeoutError: タイムアウト時
            LLMInternalError: APIエラーやその他のエラー時
        """
        generation_config = None
        if response_schema is not None:
            generation_config = genai.GenerationConfig(
                response_mime_type=JSON_MIME_TYPE,
                response_schema=response_schema,
            )

        retry_delay_base = 1.0  # 基本待機時間（秒）

        # 注意: SDKの generate_content は同期呼び出しのため、asyncio.to_thread でラップする
        def _generate() -> str:
            for attempt in range(self.max_attempts):
                try:
                    response = self.model.generate_content(
                        contents,
                        generation_config=generation_config,
                    )
                    return extract_gemini_text(response)
                except google_exceptions.ResourceExhausted as e:
                    # 429エラー（クォータ制限）の場合
                    error_str = str(e)

                    # エラーメッセージからretry_delayを抽出
                    retry_delay = None
                    retry_delay_match = re.search(r'Please retry in ([\d.]+)s', error_str)
                    if retry_delay_match:
                        retry_delay = float(retry_delay_match.group(1))

                    if attempt < self.max_attempts - 1:
                        wait_time = retry_delay if retry_delay else retry_delay_base * (2 ** attempt)
                        logger.warning(
                            f"Gemini API クォータ制限エラー（429）: {error_str[:200]} "
                            f"リトライ待機: {wait_time:.1f}秒後（試行 {attempt + 1}/{self.max_attempts}）"
                        )
                        time.sleep(wait_time)
                        continue

                    error_message = "Gemini APIのクォータ制限に達しました。しばらく時間をおいてから再度お試しください。"
                    if retry_delay:
                        error_message += f" 推奨待機時間: {retry_delay:.0f}秒"
                    raise LLMInternalError(error_message) from e
                except Exception as e:
                    # その他のエラーは即座に投げる
                    raise LLMInternalError(f"Gemini API呼び出しエラー: {str(e)}") from e

            raise LLMInternalError("Gemini API呼び出しに失敗しました")

        t_start = time.perf_counter()
        try:
            # タイムアウト付きで実行
            answer = await asyncio.wait_for(
                asyncio.to_thread(_generate),
                timeout=self.timeout_sec
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini APIタイムアウト: {self.timeout_sec}秒")
            raise LLMTimeoutError(
                f"Gemini APIへのリクエストがタイムアウトしました（{self.timeout_sec}秒）"
            ) from e
        except LLMInternalError as e:
            logger.error(f"Gemini APIエラー: {e}")
            raise

        t_ms = (time.perf_counter() - t_start) * 1000
        logger.info(
            f"Gemini API回答取得: model={self.model_name}, "
            f"json={response_schema is not None}, {len(answer)}文字, {t_ms:.0f}ms"
        )
        return answer


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    """
    Geminiクライアントのシングルトンインスタンスを取得（@lru_cacheで生成を抑える）

    APIルーターは Depends(get_gemini_client) でこのインスタンスを受け取り、
    各操作に引数として渡す。

    Returns:
        GeminiClientインスタンス
    """
    return GeminiClient()
