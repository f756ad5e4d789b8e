"""
ルーター共通の依存関係（FastAPI Depends 用）
"""
import logging

from docquiz.core.errors import AppError
from docquiz.llm.base import LLMClient, LLMInternalError
from docquiz.llm.gemini import get_gemini_client

# ロガー設定
logger = logging.getLogger(__name__)


def get_llm_client() -> LLMClient:
    """
    アプリ全体で共有するLLMクライアントを返す

    テストでは app.dependency_overrides[get_llm_client] でフェイクに差し替える。

    Raises:
        AppError: APIキー未設定などでクライアントを生成できない場合（INTERNAL_ERROR）
    """
    try:
        return get_gemini_client()
    except (ValueError, LLMInternalError) as e:
        logger.error(f"LLMクライアントの生成に失敗: {e}")
        raise AppError("INTERNAL_ERROR", str(e)) from e
