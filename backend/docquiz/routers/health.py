"""
Health check APIルーター（死活確認用）

【初心者向け】
- GET /health: サーバーが生きているか確認するだけのエンドポイント
- LLMは呼ばない。設定されたモデル名とAPIキー設定有無だけを返す
"""
from fastapi import APIRouter

from docquiz.core.settings import settings

router = APIRouter()


@router.get("")
async def health_check():
    """ヘルスチェック用エンドポイント"""
    return {
        "status": "ok",
        "model": settings.gemini_model,
        "api_key_configured": bool(settings.gemini_api_key),
    }
